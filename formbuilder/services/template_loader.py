"""
Template loader.

Single-shot asynchronous acquisition of a template document. Loads are not
queued: starting a new load supersedes the one in flight, whose task is
cancelled and whose result, should it still arrive, is discarded. Only the
most recent load can install a template.
"""

import asyncio
import logging
from typing import Any, Awaitable, Callable

from formbuilder.core.exceptions import TemplateLoadError, TemplateParseError
from formbuilder.models.contracts.templates import FormTemplate
from formbuilder.services.template_editor import deserialize_template, parse_template_data

logger = logging.getLogger(__name__)

# Fetches a document: JSON text/bytes, or an already-decoded mapping
Fetch = Callable[[str], Awaitable[Any]]


class TemplateLoader:
    """
    Loads templates for one view.

    Args:
        fetch: Coroutine function returning the raw document for a source
        on_loaded: Called with each template that is installed
    """

    def __init__(self, fetch: Fetch, on_loaded: Callable[[FormTemplate], None] | None = None):
        self._fetch = fetch
        self._on_loaded = on_loaded
        self._generation = 0
        self._task: asyncio.Task | None = None
        self.template: FormTemplate | None = None

    @property
    def loading(self) -> bool:
        return self._task is not None and not self._task.done()

    async def load(self, source: str) -> FormTemplate | None:
        """
        Fetch, parse and install the template at source.

        Returns:
            The installed template, or None if a newer load superseded this one

        Raises:
            TemplateLoadError: If fetching or parsing fails; nothing is installed
        """
        self._generation += 1
        generation = self._generation

        if self.loading:
            logger.info(f"Superseding in-flight template load with {source}")
            self._task.cancel()

        task = asyncio.create_task(self._fetch_and_parse(source))
        self._task = task

        try:
            template = await task
        except (asyncio.CancelledError, TemplateLoadError):
            if generation != self._generation:
                logger.debug(f"Discarding superseded load of {source}")
                return None
            raise

        if generation != self._generation:
            logger.info(f"Discarding stale template from {source}")
            return None

        self.template = template
        logger.info(f"Loaded template '{template.title}' ({len(template.fields)} fields) from {source}")
        if self._on_loaded is not None:
            self._on_loaded(template)
        return template

    async def _fetch_and_parse(self, source: str) -> FormTemplate:
        try:
            document = await self._fetch(source)
        except TemplateLoadError:
            raise
        except Exception as e:
            logger.warning(f"Template fetch from {source} failed: {e}")
            raise TemplateLoadError(source, str(e)) from e

        try:
            if isinstance(document, (str, bytes)):
                return deserialize_template(document)
            return parse_template_data(document)
        except TemplateParseError as e:
            logger.warning(f"Template from {source} is unusable: {e.message}")
            raise TemplateLoadError(source, e.message) from e
