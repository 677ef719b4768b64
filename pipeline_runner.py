#!/usr/bin/env python3
import argparse
import sys
from flake_ci.repositories import PipelineConfigRepository
from flake_ci.services.pipeline_controller import PipelineController
from flake_ci.utils.logging import setup_logger
from flake_ci.utils.settings import Settings


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Nix flake CI pipeline")
    parser.add_argument('--config', help='Pipeline configuration file (defaults to $FLAKE_CI_CONFIG_FILE or ./flake-ci.yaml)')
    parser.add_argument('--system', help='System to build for, e.g. x86_64-linux')
    parser.add_argument('--nix-arg', action='append', dest='nix_args',
                        help='Extra argument passed through to nix, repeatable (use --nix-arg=--flag for flags)')
    parser.add_argument('--dry-run', action='store_true', help='Log the commands without running them')
    args = parser.parse_args(argv)

    logger = setup_logger("FlakeCI")

    try:
        settings = Settings.from_env()
        config_file = args.config or settings.config_file
        logger.info(f"Starting flake CI pipeline with config file: {config_file}")
        params = PipelineConfigRepository(config_file).load()
        if args.system:
            params["system"] = args.system
        if args.nix_args:
            params["nixArgs"] = args.nix_args
        PipelineController(settings, dry_run=args.dry_run).run(params)
        logger.info("Flake CI pipeline completed successfully")
        return 0
    except Exception as e:
        logger.error(f"Flake CI pipeline failed: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
