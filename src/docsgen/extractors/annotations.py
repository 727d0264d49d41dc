from __future__ import annotations

import ast
import logging
from pathlib import Path
from typing import Iterable

from docsgen.domain.models import Endpoint, Parameter
from docsgen.errors import NoFilesError, ParseError

logger = logging.getLogger(__name__)

DOCS = "@docs"
PATH = "@path"
METHOD = "@method"
RESPONSE = "@response"
PARAMETERS = "@parameters"

# directive -> Endpoint field for the single-value directives
_FIELD_DIRECTIVES = {
    DOCS: "description",
    PATH: "path",
    METHOD: "method",
    RESPONSE: "response_type_name",
}


def extract_endpoints_from_source(source: str, filename: str = "<string>") -> list[Endpoint]:
    """
    Parse Python source and extract endpoints from handler docstrings like:

        def create_user(request):
            \"\"\"@docs Creates a user.
            @path /users
            @method POST
            @parameters name string true
            @response CreateUserResponse
            \"\"\"

    Uses ast only; does not import/execute code. A syntax error raises
    ParseError for `filename`.
    """
    try:
        tree = ast.parse(source, filename=filename)
    except SyntaxError as exc:
        raise ParseError(filename, f"line {exc.lineno}: {exc.msg}") from exc

    endpoints: list[Endpoint] = []
    for node in _iter_function_defs(tree):
        doc = ast.get_docstring(node, clean=True)
        if not doc or doc.split(None, 1)[0] != DOCS:
            continue
        endpoints.append(_endpoint_from_docstring(node.name, doc, filename))
    return endpoints


def extract_endpoints_from_file(path: str | Path) -> list[Endpoint]:
    p = Path(path)
    try:
        source = p.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise ParseError(p, str(exc)) from exc
    return extract_endpoints_from_source(source, filename=str(p))


def parse_files(paths: Iterable[str | Path]) -> list[Endpoint]:
    """Parse every file in order. Fails as a whole on the first bad file."""
    files = list(paths)
    if not files:
        raise NoFilesError()

    out: list[Endpoint] = []
    for f in files:
        found = extract_endpoints_from_file(f)
        logger.debug("parsed %s: %d endpoint(s)", f, len(found))
        out.extend(found)
    return out


def _iter_function_defs(tree: ast.AST) -> Iterable[ast.FunctionDef | ast.AsyncFunctionDef]:
    # ast.walk is breadth-first; sort by position so output follows the source
    defs = [
        node
        for node in ast.walk(tree)
        if isinstance(node, (ast.FunctionDef, ast.AsyncFunctionDef))
    ]
    defs.sort(key=lambda n: (n.lineno, n.col_offset))
    return defs


def _endpoint_from_docstring(handler: str, doc: str, filename: str) -> Endpoint:
    fields: dict[str, str] = {}
    params: list[Parameter] = []

    for raw in doc.splitlines():
        line = raw.strip()
        if not line.startswith("@"):
            continue

        parts = line.split(None, 1)
        directive = parts[0]
        rest = parts[1].strip() if len(parts) > 1 else ""

        if directive in _FIELD_DIRECTIVES:
            fields[_FIELD_DIRECTIVES[directive]] = rest
        elif directive == PARAMETERS:
            param = _parse_parameter(rest)
            if param is None:
                logger.debug(
                    "%s: dropping malformed %s line in %s: %r",
                    filename, PARAMETERS, handler, line,
                )
                continue
            params.append(param)

    return Endpoint(handler=handler, parameters=params, **fields)


def _parse_parameter(text: str) -> Parameter | None:
    # exactly: <name> <type> <true|false>
    tokens = text.split()
    if len(tokens) != 3:
        return None
    name, type_, required = tokens
    return Parameter(name=name, type=type_, required=required == "true")
