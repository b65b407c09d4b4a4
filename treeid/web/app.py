import logging
from pathlib import Path
from fastapi import FastAPI
from fastapi.responses import HTMLResponse
from fastapi.staticfiles import StaticFiles

from treeid.services.api import app as api_app

logging.basicConfig(level=logging.INFO, format="%(asctime)s %(name)s %(levelname)s %(message)s")

WEB_DIR = Path(__file__).resolve().parent

app = FastAPI(title="treeid web")


@app.get("/", response_class=HTMLResponse)
def index():
    return (WEB_DIR / "templates" / "index.html").read_text(encoding="utf-8")


app.mount("/static", StaticFiles(directory=str(WEB_DIR / "static")), name="static")

# registered last: the "" mount matches every path
app.mount("", api_app)
