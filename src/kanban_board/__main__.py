import uvicorn

from kanban_board.config import load_settings


def main() -> None:
    settings = load_settings()
    uvicorn.run(
        "kanban_board.app.main:create_app",
        factory=True,
        host=settings.host,
        port=settings.port,
        log_config=None,  # setup_logging owns the handlers
    )


if __name__ == "__main__":
    main()
