"""
Blog API: Process Entry Point
=============================

Runs the application under uvicorn on the configured host and port:

    python -m blog_api
    PORT=5000 DATABASE_URL=sqlite+aiosqlite:///./blogs.db CREATE_SCHEMA_ON_STARTUP=true blog-api
"""

import uvicorn

from blog_api.config import settings


def main() -> None:
    uvicorn.run(
        "blog_api.main:app",
        host=settings.backend_host,
        port=settings.backend_port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
