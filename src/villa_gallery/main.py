"""Local server entrypoint."""

import uvicorn

from villa_gallery.api.app import create_app
from villa_gallery.containers import build_container


def main() -> None:
    """Run the gallery API with uvicorn on the configured port."""
    container = build_container()
    app = create_app(container)
    uvicorn.run(app, host="0.0.0.0", port=container.settings.port)  # noqa: S104


if __name__ == "__main__":
    main()
