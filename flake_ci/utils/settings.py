import os
from dataclasses import dataclass

CONTAINER_BUILD_SYSTEM = "x86_64-linux"
AWS_AGENT_LABEL = "euler-nix"


@dataclass(frozen=True)
class Settings:
    """Runtime knobs read from the environment of the executing agent."""
    config_file: str
    stash_dir: str
    stash_ttl_hours: float
    agent_workspace_root: str

    @classmethod
    def from_env(cls) -> "Settings":
        cwd = os.getcwd()
        return cls(
            config_file=os.environ.get("FLAKE_CI_CONFIG_FILE", os.path.join(cwd, "flake-ci.yaml")),
            stash_dir=os.environ.get("FLAKE_CI_STASH_DIR", os.path.join(cwd, ".flake-ci", "stash")),
            stash_ttl_hours=float(os.environ.get("FLAKE_CI_STASH_TTL_HOURS", "24")),
            agent_workspace_root=os.environ.get("FLAKE_CI_AGENT_WORKSPACE", os.path.join(cwd, ".flake-ci", "agents")),
        )
