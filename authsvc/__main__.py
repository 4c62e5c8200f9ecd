"""
Run the API with uvicorn: `python -m authsvc` or the `authsvc` script.
"""

import uvicorn

from authsvc.core.config import get_settings


def main() -> None:
    settings = get_settings()
    uvicorn.run(
        "authsvc.main:app",
        host=settings.HOST,
        port=settings.PORT,
        log_level=settings.LOG_LEVEL.lower(),
        reload=settings.DEBUG,
    )


if __name__ == "__main__":
    main()
