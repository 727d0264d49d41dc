from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Mapping

import yaml
from jinja2 import Environment, select_autoescape

from docsgen.config import DocsConfig, OutputFormat
from docsgen.domain.models import Endpoint
from docsgen.errors import SerializeError

logger = logging.getLogger(__name__)

# expected extensions per format; the first one is appended when missing
_EXTENSIONS = {
    OutputFormat.JSON: (".json",),
    OutputFormat.YAML: (".yml", ".yaml"),
    OutputFormat.HTML: (".html", ".htm"),
}

_HTML_TEMPLATE = """\
<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="utf-8">
  <title>API documentation</title>
</head>
<body>
  <h1>API documentation</h1>
  {% for key, e in endpoints.items() %}
  <section id="{{ key | replace(' ', '-') }}">
    <h2><code>{{ e.method }}</code> {{ e.path }}</h2>
    <p>{{ e.description }}</p>
    <p>Handler: <code>{{ e.handler }}</code>{% if e.response %}, response: <code>{{ e.response }}</code>{% endif %}</p>
    {% if e.parameters %}
    <table>
      <tr><th>Name</th><th>Type</th><th>Required</th></tr>
      {% for p in e.parameters %}
      <tr><td>{{ p.name }}</td><td>{{ p.type }}</td><td>{{ "yes" if p.required else "no" }}</td></tr>
      {% endfor %}
    </table>
    {% endif %}
    {% for r in e.responses %}
    <h3>{{ r.statusCode }}</h3>
    <pre>{{ r.body | tojson(indent=2) }}</pre>
    {% endfor %}
  </section>
  {% endfor %}
</body>
</html>
"""

_env = Environment(autoescape=select_autoescape(default=True, default_for_string=True))


def to_document(snapshot: Mapping[str, Endpoint]) -> dict[str, dict[str, Any]]:
    """Plain-dict form keyed by "METHOD path"."""
    return {key: e.to_dict() for key, e in snapshot.items()}


def render(snapshot: Mapping[str, Endpoint], fmt: OutputFormat | str) -> bytes:
    fmt = OutputFormat(fmt)
    try:
        doc = to_document(snapshot)
        if fmt is OutputFormat.JSON:
            return json.dumps(doc, indent=2).encode("utf-8")
        if fmt is OutputFormat.YAML:
            return yaml.safe_dump(doc, sort_keys=False, allow_unicode=True).encode("utf-8")
        return _env.from_string(_HTML_TEMPLATE).render(endpoints=doc).encode("utf-8")
    except (TypeError, ValueError, yaml.YAMLError) as exc:
        raise SerializeError(f"marshal {fmt.value}: {exc}") from exc


def output_path(filename: str, fmt: OutputFormat | str, directory: Path | None = None) -> Path:
    fmt = OutputFormat(fmt)
    exts = _EXTENSIONS[fmt]
    name = filename if Path(filename).suffix.lower() in exts else filename + exts[0]
    p = Path(name)
    if directory is not None and not p.is_absolute():
        p = Path(directory) / p
    return p


def write_docs(
    snapshot: Mapping[str, Endpoint],
    config: DocsConfig,
    directory: Path | None = None,
) -> Path:
    data = render(snapshot, config.output)
    out_path = output_path(config.filename, config.output, directory)
    try:
        out_path.parent.mkdir(parents=True, exist_ok=True)
        out_path.write_bytes(data)
    except OSError as exc:
        raise SerializeError(f"write {out_path}: {exc}") from exc

    logger.info("wrote %d endpoint(s) to %s", len(snapshot), out_path)
    return out_path


def load_json(path: Path) -> dict[str, Endpoint]:
    """Read back a JSON docs file produced by write_docs."""
    try:
        raw = json.loads(Path(path).read_text(encoding="utf-8"))
    except (OSError, ValueError) as exc:
        raise SerializeError(f"read {path}: {exc}") from exc
    return {key: Endpoint.model_validate(value) for key, value in raw.items()}
