"""
File Preview - preview and thumbnail service for a file manager backend
"""

import argparse

import uvicorn

from file_preview.core.config import Settings, settings
from file_preview.core.factory import create_app
from file_preview.core.logging import logger, setup_logging


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run the file preview server")
    parser.add_argument("data_folder", nargs="?", default=None, help="Folder served by the drive")
    parser.add_argument("--preview", default=None, help="URL of preview generation service, or 'none'")
    parser.add_argument("--port", type=int, default=None, help="Port for web server")
    parser.add_argument("--icons", default=None, help="Folder with fallback icons")
    return parser.parse_args(argv)


def build_settings(args: argparse.Namespace, base: Settings = settings) -> Settings:
    """Command line flags win over APP_* environment variables"""
    overrides = {
        "data_folder": args.data_folder,
        "preview": args.preview,
        "port": args.port,
        "icons_path": args.icons,
    }
    return base.model_copy(update={k: v for k, v in overrides.items() if v is not None})


def main(argv=None) -> None:
    config = build_settings(parse_args(argv))
    setup_logging(config.log_level)

    app = create_app(config)
    logger.info(f"Starting webserver at port {config.port}")
    uvicorn.run(app, host="0.0.0.0", port=config.port, log_level=config.log_level.lower())


if __name__ == "__main__":
    main()
