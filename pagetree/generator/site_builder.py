"""High-level orchestration for rendering a Markdown tree into a linked site.

A build runs in two phases. The traversal phase walks the source tree once,
depth-first and in lexical order, rendering every ``*.md`` document through
conversion, heading anchoring, link rewriting and the page template, and
mirroring every other regular file. While walking it records, per
destination directory, the rendered pages and the subdirectories that hold
documents. The synthesis phase then renders an ``index.html`` listing for
each recorded directory that does not already ship its own.

Example
-------
>>> from pathlib import Path
>>> from pagetree.config import load_build_config
>>> from pagetree.generator import SiteBuilder
>>> config = load_build_config(None, source_dir=Path("docs"))  # doctest: +SKIP
>>> report = SiteBuilder(config).run()  # doctest: +SKIP
>>> report.indexes  # doctest: +SKIP
[PosixPath('/srv/output/index.html'), ...]
"""

from __future__ import annotations

import dataclasses as dc
import logging
import os
import typing as typ
from pathlib import Path

from jinja2 import Environment, FileSystemLoader, TemplateError, select_autoescape
from markupsafe import Markup

from pagetree._constants import (
    HIDDEN_PREFIX,
    INDEX_NAME,
    MD_SUFFIX,
    README_NAME,
    TEMPLATE_GLOB,
)
from pagetree.errors import BuildConfigError, MarkupError, TemplateRenderError, TraversalError
from pagetree.generator.anchors import assign_anchors
from pagetree.generator.headings import first_heading
from pagetree.generator.link_rewriter import rewrite_links
from pagetree.generator.models import (
    BuildReport,
    DirectoryIndex,
    Page,
    PageMeta,
    file_name_to_title,
)
from pagetree.generator.output import latest_mtime, mirror_file, write_generated
from pagetree.generator.renderer import HtmlContentRenderer

if typ.TYPE_CHECKING:
    from jinja2 import Template

    from pagetree.config import BuildConfig

logger = logging.getLogger(__name__)


@dc.dataclass(slots=True)
class _BuildState:
    """Bookkeeping owned by a single :meth:`SiteBuilder.run` invocation."""

    indexes: dict[Path, DirectoryIndex] = dc.field(default_factory=dict)
    skip_index: set[Path] = dc.field(default_factory=set)
    report: BuildReport = dc.field(default_factory=BuildReport)

    def index_for(self, directory: Path) -> DirectoryIndex:
        """Return the accumulator for destination ``directory``, creating it."""
        index = self.indexes.get(directory)
        if index is None:
            index = self.indexes[directory] = DirectoryIndex()
        return index


class SiteBuilder:
    """Render a source tree of Markdown documents into an HTML output tree."""

    def __init__(
        self,
        config: BuildConfig,
        *,
        renderer: HtmlContentRenderer | None = None,
    ) -> None:
        """Validate the configuration and load the page template.

        Parameters
        ----------
        config : BuildConfig
            Build settings; validated here, before any traversal.
        renderer : HtmlContentRenderer, optional
            Markdown converter; built from ``config`` when omitted.

        Raises
        ------
        BuildConfigError
            If the roots coincide or the templates directory holds no
            ``*.html`` template.
        TemplateRenderError
            If the selected template cannot be loaded.
        TraversalError
            If a template file cannot be stat-ed for the watermark.
        """
        self.config = config.validate()
        self.renderer = renderer or HtmlContentRenderer(
            self.config.pygments_style,
            converter=self.config.converter,
            timeout=self.config.converter_timeout,
        )
        templates_dir = self.config.templates_dir
        template_paths = sorted(templates_dir.glob(TEMPLATE_GLOB))
        if not template_paths:
            msg = f"No '{TEMPLATE_GLOB}' templates found in '{templates_dir}'."
            raise BuildConfigError(msg)
        self.env = Environment(
            loader=FileSystemLoader(str(templates_dir)),
            autoescape=select_autoescape(["html", "xml"]),
            trim_blocks=True,
            lstrip_blocks=True,
        )
        template_name = self.config.template or template_paths[0].name
        try:
            self.template: Template = self.env.get_template(template_name)
        except TemplateError as exc:
            msg = f"Cannot load template '{template_name}' from '{templates_dir}': {exc}"
            raise TemplateRenderError(msg) from exc
        self.watermark = latest_mtime(template_paths)

    def run(self) -> BuildReport:
        """Render the whole tree, then synthesize the directory indexes.

        Returns
        -------
        BuildReport
            Destination paths written, grouped by kind, in write order.

        Raises
        ------
        PagetreeError
            Any failure aborts the build; files already written stay on disk.
        """
        logger.info(
            "Rendering %s into %s with template %s (%s converter)",
            self.config.source_dir,
            self.config.output_dir,
            self.template.name,
            self.renderer.backend,
        )
        state = _BuildState()
        self._walk(self.config.source_dir, state)
        for directory, index in state.indexes.items():
            if directory in state.skip_index:
                logger.info("Keeping existing %s in %s", INDEX_NAME, directory)
                continue
            state.report.indexes.append(self._render_index(directory, index))
        return state.report

    def _walk(self, directory: Path, state: _BuildState) -> None:
        """Visit ``directory`` depth-first with entries in lexical order."""
        try:
            with os.scandir(directory) as iterator:
                entries = sorted(iterator, key=lambda entry: entry.name)
        except OSError as exc:
            msg = f"Cannot list '{directory}': {exc}"
            raise TraversalError(msg) from exc

        for entry in entries:
            path = Path(entry.path)
            try:
                is_dir = entry.is_dir(follow_symlinks=False)
                is_file = entry.is_file(follow_symlinks=False)
            except OSError as exc:
                msg = f"Cannot stat '{path}': {exc}"
                raise TraversalError(msg) from exc
            if is_dir:
                if not self._is_pruned(path):
                    self._walk(path, state)
            elif is_file and not entry.name.startswith(HIDDEN_PREFIX):
                self._visit_file(path, state)

    def _is_pruned(self, directory: Path) -> bool:
        return directory.name.startswith(HIDDEN_PREFIX) or directory in (
            self.config.output_dir,
            self.config.templates_dir,
        )

    def _visit_file(self, source: Path, state: _BuildState) -> None:
        """Render or mirror ``source`` and record it in the directory indexes."""
        destination = self.config.output_dir / source.relative_to(self.config.source_dir)
        directory = destination.parent

        if not source.name.endswith(MD_SUFFIX):
            if source.name == INDEX_NAME:
                state.skip_index.add(directory)
            mirror_file(destination, source)
            logger.debug("Mirrored %s", destination)
            state.report.mirrored.append(destination)
            return

        if directory != self.config.output_dir:
            state.index_for(directory.parent).add_category(
                PageMeta(
                    title=file_name_to_title(directory.name),
                    destination_name=directory.name,
                )
            )
        title = self._render_document(source, destination)
        state.index_for(directory).add_page(
            PageMeta(title=title, destination_name=source.name, source_path=source)
        )
        state.report.documents.append(destination)

    def _render_document(self, source: Path, destination: Path) -> str:
        """Render one document to ``destination`` and return its title."""
        content = self._prepare_fragment(source)
        title = self._heading(content, source) or file_name_to_title(destination.name)
        html = self._render(Page(title=title, content=Markup(content)))
        write_generated(destination, html, watermark=self.watermark, source=source)
        logger.debug("Rendered %s (%s)", destination, title)
        return title

    def _render_index(self, directory: Path, index: DirectoryIndex) -> Path:
        """Render the synthetic listing page for ``directory``.

        The first ``README.md`` entry, when present, is not listed; its
        converted body becomes the page content and its first heading the
        page title.
        """
        readme: str | None = None
        pages: list[PageMeta] = []
        for meta in index.pages:
            if (
                readme is None
                and meta.destination_name == README_NAME
                and meta.source_path is not None
            ):
                readme = self._prepare_fragment(meta.source_path)
                continue
            pages.append(meta)

        title = f"{directory.name} index"
        if readme:
            title = self._heading(readme, directory / README_NAME) or title
        page = Page(
            title=title,
            content=Markup(readme or ""),
            pages=pages,
            categories=list(index.categories),
        )
        destination = directory / INDEX_NAME
        write_generated(destination, self._render(page), watermark=self.watermark)
        logger.info("Wrote index %s", destination)
        return destination

    def _prepare_fragment(self, source: Path) -> str:
        """Convert ``source`` and post-process headings and links."""
        fragment = self.renderer.convert_file(source)
        try:
            return rewrite_links(assign_anchors(fragment))
        except MarkupError as exc:
            msg = f"'{source}': {exc}"
            raise MarkupError(msg) from exc

    @staticmethod
    def _heading(fragment: str, source: Path) -> str:
        try:
            return first_heading(fragment)
        except MarkupError as exc:
            msg = f"'{source}': {exc}"
            raise MarkupError(msg) from exc

    def _render(self, page: Page) -> str:
        """Render ``page`` with the configured template."""
        context = {
            "page": page,
            "title": page.title,
            "content": page.content,
            "pages": page.pages,
            "categories": page.categories,
        }
        try:
            return self.template.render(**context)
        except TemplateError as exc:
            msg = f"Rendering template '{self.template.name}' failed: {exc}"
            raise TemplateRenderError(msg) from exc


__all__ = ["SiteBuilder"]
