"""Static Site — a public/ directory served at the root.

Demonstrates:
- ``StaticHandlerBuilder`` serving ./public at ``/`` with gzip
- Exception routes that answer before the file server
- A custom 404 page via ``@app.error``
- Directory listings left off (``/downloads/`` renders an empty listing)

Run:
    pip install staticweb[server]
    python app.py
"""

from pathlib import Path

from staticweb import App, Request, Route, StaticHandlerBuilder

PUBLIC_DIR = Path(__file__).parent / "public"

VERSION = "1.0.0"


def version():
    return {"version": VERSION}


def health():
    return "ok"


builder = (
    StaticHandlerBuilder(PUBLIC_DIR)
    .path("/")
    .gzip(True)
    .except_(
        Route("/version.json", version),
        Route("/healthz", health),
    )
)

app = App(builder)


@app.error(404)
def not_found(request: Request):
    return f"<h1>404</h1><p>Nothing at {request.path}</p>"


if __name__ == "__main__":
    app.run()
