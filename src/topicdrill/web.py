"""Flask presentation surface for the practice page."""

from __future__ import annotations

import json
import logging
import re

from flask import Flask, Response, current_app, jsonify, render_template_string, request

from .config import AppConfig
from .models import FormatError
from .progress import CHART_MODES
from .sampler import DrawRangeError
from .service import PracticeSession, PresentedItem

SESSION_KEY = "topicdrill.session"

logger = logging.getLogger(__name__)

PAGE_HTML = r"""
<!doctype html>
<html lang="en">
<head>
  <meta charset="utf-8">
  <meta name="viewport" content="width=device-width, initial-scale=1">
  <title>Practice</title>
  <script src="https://cdn.jsdelivr.net/npm/chart.js"></script>
  <style>
    body { font-family: system-ui, sans-serif; margin: 2rem; }
    #upper-buttons button { display: flex; flex-direction: column; align-items: center; margin-bottom: 1rem; }
    #upper-buttons button.done { background-color: green; color: white; }
    #graph { position: relative; height: 360px; max-width: 480px; }
    .error { color: #b00020; }
  </style>
</head>
<body>
  <h1>Practice</h1>
  <p>{{ item_count }} practice items loaded.</p>
  <div id="upper-buttons"></div>
  <button id="button">Start</button>
  <button id="next">Next</button>
  <input id="export-name" type="text" value="{{ export_filename }}" aria-label="Export file name">
  <button id="save">Save</button>
  <form id="import-form" enctype="multipart/form-data">
    <input type="file" name="file" accept="application/json">
    <button type="submit">Import</button>
  </form>
  <p id="message" class="error"></p>
  <div id="graph"></div>

<script>
const DRAW_SIZE = {{ draw_size }};
const COLORS = ['#FF6384', '#36A2EB', '#FFCE56', '#4BC0C0', '#9966FF', '#FF9F40'];
let doughnutChart = null;

function showMessage(text) {
  document.getElementById('message').textContent = text || '';
}

function buttonText(item) {
  return `${item.name} (Repeated ${item.counter} times)`;
}

async function updateChart() {
  const res = await fetch('/api/progress');
  const progress = await res.json();
  const colors = progress.labels.map((label, i) =>
    i === progress.labels.length - 1 ? 'white' : COLORS[i % COLORS.length]);
  const graph = document.getElementById('graph');
  graph.innerHTML = '';
  const canvas = document.createElement('canvas');
  graph.appendChild(canvas);
  if (doughnutChart) { doughnutChart.destroy(); }
  doughnutChart = new Chart(canvas.getContext('2d'), {
    type: 'doughnut',
    data: {
      labels: progress.labels,
      datasets: [{
        data: progress.values,
        backgroundColor: colors,
        hoverBackgroundColor: colors,
        borderColor: progress.labels.map(() => '#000000'),
        borderWidth: 0.5
      }]
    },
    options: {
      responsive: true,
      maintainAspectRatio: false,
      plugins: { title: { display: true, text: 'Progress Graph', color: 'black', font: { size: 18 } } }
    }
  });
}

async function createQuestionButtons() {
  const res = await fetch('/api/draw', {
    method: 'POST',
    headers: { 'Content-Type': 'application/json' },
    body: JSON.stringify({ count: DRAW_SIZE })
  });
  const payload = await res.json();
  if (!res.ok) { showMessage(payload.error); return; }
  showMessage('');
  const container = document.getElementById('upper-buttons');
  container.innerHTML = '';
  payload.items.forEach(item => {
    const btn = document.createElement('button');
    btn.textContent = buttonText(item);
    btn.onclick = async () => {
      const practiced = await fetch(`/api/items/${item.index}/practice`, { method: 'POST' });
      const result = await practiced.json();
      if (!practiced.ok) { showMessage(result.error); return; }
      btn.textContent = buttonText(result.item);
      btn.classList.add('done');
      btn.disabled = true;
      await updateChart();
    };
    container.appendChild(btn);
  });
}

window.onload = async () => {
  await updateChart();
  const start = document.querySelector('#button');
  start.addEventListener('click', () => { createQuestionButtons(); start.remove(); });
  document.querySelector('#next').addEventListener('click', () => createQuestionButtons());
  document.querySelector('#save').addEventListener('click', () => {
    const name = document.getElementById('export-name').value.trim();
    window.location = name ? `/export?filename=${encodeURIComponent(name)}` : '/export';
  });
  document.querySelector('#import-form').addEventListener('submit', async (event) => {
    event.preventDefault();
    const res = await fetch('/import', { method: 'POST', body: new FormData(event.target) });
    const payload = await res.json();
    if (!res.ok) { showMessage(payload.error); return; }
    showMessage('');
    document.getElementById('upper-buttons').innerHTML = '';
    await updateChart();
  });
};
</script>
</body>
</html>
"""


def create_app(config: AppConfig | None = None, session: PracticeSession | None = None) -> Flask:
    """Build the Flask app around one practice session.

    When no session is given, a new one loads the configured catalog.
    """
    config = config or AppConfig()
    app = Flask(__name__)
    app.config.update(config.flask_settings())

    if session is None:
        session = PracticeSession()
        session.load(config.catalog_path)
    app.extensions[SESSION_KEY] = session

    _register_routes(app)
    return app


def get_session() -> PracticeSession:
    """Return the session owned by the current app."""
    return current_app.extensions[SESSION_KEY]


def _item_payload(item: PresentedItem) -> dict[str, object]:
    return {"index": item.index, "name": item.name, "counter": item.counter, "label": item.label}


def _progress_payload(session: PracticeSession, mode: str = "count") -> dict[str, object]:
    snapshot = session.snapshot()
    payload: dict[str, object] = dict(snapshot.chart_data(mode))
    payload.update(
        {
            "mode": mode,
            "completed": snapshot.completed_total,
            "remaining": snapshot.remaining,
            "total": snapshot.total,
        }
    )
    return payload


def _error(message: str, status: int) -> tuple[Response, int]:
    return jsonify({"error": message}), status


def _requested_count(default: int) -> int:
    """Read the draw size from a JSON body, form field or query string."""
    body = request.get_json(silent=True)
    raw: object = None
    if isinstance(body, dict):
        raw = body.get("count")
    if raw is None:
        raw = request.values.get("count")
    if raw is None:
        return default
    if isinstance(raw, bool) or (isinstance(raw, float) and not raw.is_integer()):
        raise ValueError("count must be an integer")
    return int(raw)


def _safe_filename(name: str, default: str) -> str:
    cleaned = re.sub(r"[^a-zA-Z0-9._ -]+", "_", name).strip()
    if not cleaned:
        return default
    if not cleaned.lower().endswith(".json"):
        cleaned += ".json"
    return cleaned


def _register_routes(app: Flask) -> None:
    @app.route("/")
    def home():
        session = get_session()
        return render_template_string(
            PAGE_HTML,
            item_count=len(session.items),
            draw_size=current_app.config["TOPICDRILL_DRAW_SIZE"],
            export_filename=current_app.config["TOPICDRILL_EXPORT_FILENAME"],
        )

    @app.route("/api/items")
    def list_items():
        session = get_session()
        items = [_item_payload(session.describe(index)) for index in range(len(session.items))]
        return jsonify({"items": items})

    @app.route("/api/draw", methods=["POST"])
    def draw():
        session = get_session()
        try:
            count = _requested_count(current_app.config["TOPICDRILL_DRAW_SIZE"])
        except (TypeError, ValueError):
            return _error("count must be an integer", 400)
        try:
            session.draw(count)
        except DrawRangeError as exc:
            logger.warning("Rejected draw: %s", exc)
            return _error(str(exc), 400)
        return jsonify({"items": [_item_payload(item) for item in session.presented()]})

    @app.route("/api/items/<int:index>/practice", methods=["POST"])
    def practice(index: int):
        session = get_session()
        try:
            session.mark_practiced(index)
        except IndexError as exc:
            return _error(str(exc), 404)
        return jsonify({"item": _item_payload(session.describe(index)), "progress": _progress_payload(session)})

    @app.route("/api/progress")
    def progress():
        mode = request.args.get("mode", "count")
        if mode not in CHART_MODES:
            return _error(f"Unknown chart mode '{mode}'", 400)
        return jsonify(_progress_payload(get_session(), mode))

    @app.route("/export")
    def export():
        default_name = current_app.config["TOPICDRILL_EXPORT_FILENAME"]
        filename = _safe_filename(request.args.get("filename", default_name), default_name)
        headers = {"Content-Disposition": f'attachment; filename="{filename}"'}
        logger.info("Exporting catalog as %s", filename)
        return Response(get_session().export_json(), mimetype="application/json", headers=headers)

    @app.route("/import", methods=["POST"])
    def import_catalog():
        upload = request.files.get("file")
        try:
            if upload is not None:
                raw: object = json.loads(upload.read().decode("utf-8-sig"))
            else:
                raw = request.get_json(silent=True)
                if raw is None:
                    raise FormatError("No catalog document was provided.")
        except (UnicodeDecodeError, json.JSONDecodeError) as exc:
            return _error(f"Catalog is not valid JSON: {exc}", 400)
        except FormatError as exc:
            return _error(str(exc), 400)

        session = get_session()
        try:
            count = session.replace_from_document(raw)
        except FormatError as exc:
            logger.error("Rejected imported catalog: %s", exc)
            return _error(str(exc), 400)
        return jsonify({"items": count, "progress": _progress_payload(session)})
