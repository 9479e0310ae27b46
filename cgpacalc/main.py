import flet as ft

from cgpacalc.config.settings import configure_logging, settings
from cgpacalc.ui.app import main


def run() -> None:
    configure_logging()
    ft.app(
        target=main,
        view=ft.AppView.WEB_BROWSER if settings.web_mode else ft.AppView.FLET_APP,
        port=settings.port,
    )


if __name__ == "__main__":
    run()
