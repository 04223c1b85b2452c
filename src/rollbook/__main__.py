"""Run the Rollbook API server: ``python -m rollbook``."""

from __future__ import annotations

import uvicorn

from rollbook.api.app import create_app
from rollbook.config import Settings
from rollbook.logging import setup_logging


def main() -> None:
    settings = Settings.from_env()
    setup_logging(log_dir=settings.log_dir, level=settings.log_level)
    app = create_app(db_path=settings.db_path, retention_years=settings.retention_years)
    uvicorn.run(app, host=settings.host, port=settings.port, log_config=None)


if __name__ == "__main__":
    main()
