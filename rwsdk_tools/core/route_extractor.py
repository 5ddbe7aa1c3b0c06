"""Route path extraction from RedwoodSDK router definitions.

Scans a worker/router source file for the router DSL calls::

    render(Document, [
      index(Home),
      route("/about", About),
      prefix("/admin", [route("/users", Users), ...adminRoutes]),
      prefix("/user", userRoutes),
    ])

and returns the fully-qualified route paths, e.g.
``["/admin/...", "/user/login", "/admin/users", "/about", "/"]``.

This is text scanning, not parsing: calls are found with regular
expressions and ``prefix(...)`` blocks are delimited by bracket matching.
Imported route arrays (``...name`` spreads and ``prefix("/p", name)``
references) are followed into the files they are imported from.

Order of the result within one scope: imported routes (spreads, then
prefix references), prefix blocks, plain routes, index route. Duplicates
keep their first position.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from pathlib import Path

from rwsdk_tools.core.source_scan import (
    blank_spans,
    find_matching_bracket,
    mask_comments,
)
from rwsdk_tools.helpers.helpers_logging import print_warning

_IDENT = r"[A-Za-z_$][\w$]*"
# Calls must not be a method or part of a longer identifier.
_CALL_GUARD = r"(?<![\w$.])"

_IMPORT_RE = re.compile(
    r"import\s+(?:type\s+)?\{\s*([^}]+?)\s*\}\s*from\s*[\"']([^\"']+)[\"']"
)
_SPREAD_RE = re.compile(rf"\.\.\.\s*({_IDENT})")
_PREFIX_REF_RE = re.compile(
    rf"{_CALL_GUARD}prefix\(\s*([\"'])([^\"']+)\1\s*,\s*({_IDENT})\s*\)"
)
_PREFIX_BLOCK_RE = re.compile(
    rf"{_CALL_GUARD}prefix\(\s*([\"'])([^\"']+)\1\s*,\s*\["
)
_ROUTE_RE = re.compile(rf"{_CALL_GUARD}route\(\s*([\"'])([^\"']+)\1")
_INDEX_RE = re.compile(rf"{_CALL_GUARD}index\(")
_ALIAS_RE = re.compile(r"\s+as\s+")

_TS_EXTENSIONS = (".ts", ".tsx")


@dataclass(frozen=True)
class ImportBinding:
    """A named import: ``import { original as local_name } from "module_path"``."""

    local_name: str
    module_path: str
    original_name: str | None = None


@dataclass(frozen=True)
class ExtractionContext:
    """Text being scanned plus everything needed to qualify its routes.

    Attributes:
        text: Whole file, or the inside of a ``prefix("/p", [ ... ])`` block.
        prefix: Path prefix accumulated from enclosing blocks and imports.
        file_path: File the text comes from (relative imports resolve here).
        bindings: Import bindings of that file, visible in nested blocks.
    """

    text: str
    prefix: str = ""
    file_path: Path | None = None
    bindings: Mapping[str, ImportBinding] = field(default_factory=dict)


def parse_imports(content: str) -> dict[str, ImportBinding]:
    """Collect ``import { ... } from "..."`` bindings keyed by local name."""
    bindings: dict[str, ImportBinding] = {}
    for match in _IMPORT_RE.finditer(content):
        names, module_path = match.group(1), match.group(2)
        for raw_name in names.split(","):
            name = raw_name.strip()
            if name.startswith("type "):
                name = name[len("type "):].strip()
            if not name:
                continue
            parts = _ALIAS_RE.split(name, maxsplit=1)
            if len(parts) == 2:
                original, alias = parts[0].strip(), parts[1].strip()
                bindings[alias] = ImportBinding(alias, module_path, original)
            else:
                bindings[name] = ImportBinding(name, module_path)
    return bindings


def resolve_import_path(
    module_path: str,
    current_file: Path | None = None,
    source_root: Path | None = None,
) -> Path | None:
    """Resolve an import specifier to a TypeScript file path.

    ``@/x`` resolves against *source_root* (default ``<cwd>/src``), ``./x``
    and ``../x`` against the directory of *current_file* (default cwd).
    Bare package specifiers cannot be resolved and return None.

    Without an explicit extension, ``.ts`` is tried before ``.tsx``; when
    neither exists the ``.ts`` candidate is returned so the caller's read
    fails with a meaningful path.
    """
    if module_path.startswith("@/"):
        base = source_root if source_root is not None else Path.cwd() / "src"
        candidate = base / module_path[2:]
    elif module_path.startswith(("./", "../")):
        base = current_file.parent if current_file is not None else Path.cwd()
        candidate = base / module_path
    else:
        return None

    if candidate.suffix in _TS_EXTENSIONS:
        return candidate

    for extension in _TS_EXTENSIONS:
        with_extension = candidate.with_name(candidate.name + extension)
        if with_extension.is_file():
            return with_extension
    return candidate.with_name(candidate.name + _TS_EXTENSIONS[0])


def _split_prefix_blocks(text: str) -> tuple[list[tuple[str, str]], str]:
    """Cut ``prefix("/p", [ ... ])`` blocks out of *text*.

    Returns:
        ``(blocks, outer)`` where blocks is a list of ``(prefix, inner_text)``
        in source order and outer is *text* with every block blanked out.
        Scanning resumes after each block, so nested prefixes are left for
        the recursive pass over the inner text.
    """
    blocks: list[tuple[str, str]] = []
    spans: list[tuple[int, int]] = []
    position = 0
    while True:
        match = _PREFIX_BLOCK_RE.search(text, position)
        if match is None:
            break
        inner_start = match.end()
        inner_end = find_matching_bracket(text, inner_start)
        blocks.append((match.group(2), text[inner_start:inner_end]))
        spans.append((match.start(), inner_end + 1))
        position = inner_end + 1
    return blocks, blank_spans(text, spans)


class RouteExtractor:
    """Extracts route paths, following imported route arrays across files."""

    def __init__(self, source_root: Path | None = None) -> None:
        self.source_root = source_root
        self._active_files: list[Path] = []

    def extract(
        self,
        content: str,
        prefix: str = "",
        file_path: Path | None = None,
    ) -> list[str]:
        """Extract the deduplicated route list of one file's content."""
        text = mask_comments(content)
        context = ExtractionContext(
            text=text,
            prefix=prefix,
            file_path=file_path,
            bindings=parse_imports(text),
        )

        tracked = file_path.resolve() if file_path is not None else None
        if tracked is not None:
            self._active_files.append(tracked)
        try:
            routes = self._extract_scope(context)
        finally:
            if tracked is not None:
                self._active_files.pop()

        return list(dict.fromkeys(routes))

    def _extract_scope(self, context: ExtractionContext) -> list[str]:
        blocks, outer = _split_prefix_blocks(context.text)
        routes: list[str] = []

        routes.extend(self._imported_routes(outer, context))

        for block_prefix, inner in blocks:
            nested = replace(context, text=inner, prefix=context.prefix + block_prefix)
            routes.extend(self._extract_scope(nested))

        for match in _ROUTE_RE.finditer(outer):
            routes.append(context.prefix + match.group(2))

        if _INDEX_RE.search(outer):
            routes.append(context.prefix + "/")

        return routes

    def _imported_routes(self, outer: str, context: ExtractionContext) -> list[str]:
        routes: list[str] = []

        for match in _SPREAD_RE.finditer(outer):
            binding = context.bindings.get(match.group(1))
            if binding is not None:
                routes.extend(
                    self._routes_from_import(binding, context.prefix, context.file_path)
                )

        for match in _PREFIX_REF_RE.finditer(outer):
            binding = context.bindings.get(match.group(3))
            if binding is not None:
                routes.extend(
                    self._routes_from_import(
                        binding,
                        context.prefix + match.group(2),
                        context.file_path,
                    )
                )

        return routes

    def _routes_from_import(
        self,
        binding: ImportBinding,
        prefix: str,
        current_file: Path | None,
    ) -> list[str]:
        with_prefix = f" with prefix {prefix}" if prefix else ""
        target = resolve_import_path(binding.module_path, current_file, self.source_root)
        if target is None:
            print_warning(
                f"Could not resolve imported routes from {binding.module_path}{with_prefix}"
            )
            return []

        if target.resolve() in self._active_files:
            print_warning(
                f"Skipping circular route import {binding.module_path}{with_prefix}"
            )
            return []

        try:
            content = target.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            print_warning(
                f"Could not process imported routes from {binding.module_path}"
                + f"{with_prefix}: {e}"
            )
            return []

        return self.extract(content, prefix, target)


def extract_routes(
    content: str,
    prefix: str = "",
    file_path: Path | None = None,
    source_root: Path | None = None,
) -> list[str]:
    """Extract the route paths defined in *content*.

    Args:
        content: Router source text.
        prefix: Path prefix applied to every route found.
        file_path: File *content* was read from; relative imports resolve
            against its directory.
        source_root: Directory ``@/`` imports resolve against.

    Returns:
        Route paths in first-seen order, without duplicates.
    """
    return RouteExtractor(source_root).extract(content, prefix, file_path)


def extract_routes_from_file(path: Path, source_root: Path | None = None) -> list[str]:
    """Read *path* and extract its routes.

    Raises:
        FileNotFoundError: If *path* does not exist
    """
    if not path.is_file():
        raise FileNotFoundError(f"Router file not found: {path}")
    content = path.read_text(encoding="utf-8")
    return extract_routes(content, file_path=path, source_root=source_root)
