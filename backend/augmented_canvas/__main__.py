"""Run the HTTP backend: `python -m augmented_canvas` or `augmented-canvas`."""

import uvicorn

from augmented_canvas.config import settings


def main() -> None:
    uvicorn.run(
        "augmented_canvas.main:app",
        host=settings.backend_host,
        port=settings.backend_port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
