"""fintrack entrypoint.

Run with:
  python -m fintrack
"""

import uvicorn

from fintrack.config import settings


def main() -> None:
    uvicorn.run(
        "fintrack.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.app_env.lower() == "development" and settings.debug,
    )


if __name__ == "__main__":
    main()
