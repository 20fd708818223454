"""Run the API with uvicorn: `python -m task_controller`."""

import uvicorn

from task_controller.config import get_settings


def main() -> None:
    settings = get_settings()
    uvicorn.run(
        "task_controller.main:app",
        host=settings.host,
        port=settings.port,
        log_config=None,
    )


if __name__ == "__main__":
    main()
