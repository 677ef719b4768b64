from unittest.mock import MagicMock
import pytest
from flake_ci.clients import AwsClient, CachixClient, DockerClient, NixClient, OmnixClient
from flake_ci.errors import ToolExecutionError


@pytest.fixture
def runner():
    runner = MagicMock()
    runner.dry_run = False
    runner.run.return_value = ""
    return runner


def test_omnix_ci_run(runner):
    OmnixClient(runner).ci_run("aarch64-darwin", "omci-aarch64-darwin.json")
    runner.run.assert_called_once_with(
        ["om", "ci", "run", "--systems", "aarch64-darwin", "--results=omci-aarch64-darwin.json"]
    )


def test_omnix_ci_run_passes_nix_args_after_separator(runner):
    OmnixClient(runner).ci_run("x86_64-linux", "omci-x86_64-linux.json", ["--option", "sandbox", "false"])
    runner.run.assert_called_once_with([
        "om", "ci", "run", "--systems", "x86_64-linux", "--results=omci-x86_64-linux.json",
        "--", "--option", "sandbox", "false",
    ])


def test_cachix_push_with_names(runner):
    CachixClient(runner).push("ROOT", "pr-1", "acme", "pkgA,pkgB", "{}")
    runner.run.assert_called_once_with(
        [
            "nix", "run", "github:juspay/cachix-push", "--",
            "--subflake", "ROOT", "--prefix", "pr-1", "--cache", "acme", "--names", "pkgA,pkgB",
        ],
        input="{}",
    )


def test_cachix_push_without_names_pushes_everything(runner):
    CachixClient(runner).push("ROOT", "pr-1", "acme", None, "{}")
    cmd = runner.run.call_args[0][0]
    assert "--names" not in cmd


def test_nix_copy_to_docker_archive(runner):
    NixClient(runner).copy_to_docker_archive("dockerImage", "dockerImage.tar.gz")
    runner.run.assert_called_once_with(
        ["nix", "run", ".#dockerImage.copyTo", "docker-archive:dockerImage.tar.gz"]
    )


def test_aws_ecr_login_password(runner):
    runner.run.return_value = "token\n"
    assert AwsClient(runner).ecr_login_password("ap-south-1") == "token"
    runner.run.assert_called_once_with(
        ["aws", "ecr", "get-login-password", "--region", "ap-south-1"],
        capture_output=True,
        secret_output=True,
    )


@pytest.mark.parametrize("output,expected", [
    ("Loaded image ID: sha256:abc\n", "sha256:abc"),
    ("Loaded image: backend:1.2.3\n", "backend:1.2.3"),
    ("noise\nLoaded image: backend:1.2.3\n\n", "backend:1.2.3"),
])
def test_docker_load_reports_image(runner, output, expected):
    runner.run.return_value = output
    assert DockerClient(runner).load("dockerImage.tar.gz") == expected
    runner.run.assert_called_once_with(["docker", "load"], stdin_path="dockerImage.tar.gz", capture_output=True)


def test_docker_load_without_output(runner):
    runner.run.return_value = "\n"
    with pytest.raises(ToolExecutionError):
        DockerClient(runner).load("dockerImage.tar.gz")


def test_docker_login_tag_push(runner):
    docker = DockerClient(runner)
    docker.login("123.dkr.ecr.us-east-1.amazonaws.com", "secret")
    docker.tag("sha256:abc", "team/backend:1.0")
    docker.push("team/backend:1.0")
    assert [c.args[0] for c in runner.run.call_args_list] == [
        ["docker", "login", "--username", "AWS", "--password-stdin", "123.dkr.ecr.us-east-1.amazonaws.com"],
        ["docker", "tag", "sha256:abc", "team/backend:1.0"],
        ["docker", "push", "team/backend:1.0"],
    ]
    assert runner.run.call_args_list[0].kwargs == {"input": "secret"}
