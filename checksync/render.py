"""
Report Layer - Render comparison entries as an HTML status page.
"""

from __future__ import annotations

import os
from html import escape
from string import Template
from typing import List, Optional

from .compare import ComparisonEntry, Status, summarize
from .config import ReportOptions
from .core.util import format_stamp
from .index import LookupFailure, Stamp


STYLESHEET = "checksync.css"
WEB_TARGET = "checksyncweb"
GIT_TARGET = "checksyncgit"
PLACEHOLDER = "-"

_LABELS = {
    Status.UP_TO_DATE: "up to date",
    Status.BEHIND: "behind",
    Status.UNTRANSLATED: "untranslated",
    Status.ORPHANED: "missing",
    Status.UNKNOWN: "unknown",
}


def _load_template(name: str) -> Template:
    base = os.path.join(os.path.dirname(__file__), "templates")
    path = os.path.join(base, name)
    with open(path, "r", encoding="utf-8") as f:
        return Template(f.read().rstrip())


def _stamp_text(value: Stamp) -> str:
    if isinstance(value, LookupFailure):
        return str(value)
    return format_stamp(value)


def _link(href: str, text: str, target: str) -> str:
    return f'<a href="{escape(href)}" target="{target}">{escape(text)}</a>'


def page_path(path: str) -> str:
    """Path of the rendered page for a source file: ``.md`` suffix dropped."""
    if path.endswith(".md"):
        return path[: -len(".md")]
    return path


def status_class(entry: ComparisonEntry) -> str:
    if entry.status is Status.BEHIND:
        return f"behind{entry.bucket}"
    return entry.status.value


def _git_cell(options: ReportOptions, language: str, path: str, value: Optional[Stamp]) -> str:
    if value is None:
        return PLACEHOLDER
    return _link(f"{options.git_base}/{language}/{path}", _stamp_text(value), GIT_TARGET)


def render_row(entry: ComparisonEntry, options: ReportOptions) -> str:
    if entry.status is Status.ORPHANED:
        web = f"{options.web_base}/{options.translated_name}/{page_path(entry.path)}"
    else:
        web = f"{options.web_base}/{page_path(entry.path)}"
    cells = [
        f'<td class="{status_class(entry)}">{_LABELS[entry.status]}</td>',
        f"<td>{_link(web, entry.path, WEB_TARGET)}</td>",
        f"<td>{_git_cell(options, options.origin_name, entry.path, entry.origin_at)}</td>",
        f"<td>{_git_cell(options, options.translated_name, entry.path, entry.translated_at)}</td>",
    ]
    return "<tr>" + "".join(cells) + "</tr>"


def render_summary(entries: List[ComparisonEntry]) -> str:
    counts = summarize(entries)
    parts = [f"{_LABELS[status]}: {count}" for status, count in counts.items()]
    return f"{len(entries)} files. " + ", ".join(parts)


def render_report(entries: List[ComparisonEntry], options: ReportOptions) -> str:
    title = (
        f"Translation status: {escape(options.origin_name)} -&gt; "
        f"{escape(options.translated_name)}"
    )
    rows = "\n".join(render_row(entry, options) for entry in entries)
    return _load_template("report.html").substitute(
        title=title,
        stylesheet=STYLESHEET,
        message=options.message,
        summary=escape(render_summary(entries)),
        rows=rows,
        updated_at=escape(format_stamp(options.generated_at)),
    )
