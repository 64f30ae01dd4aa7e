"""
Template document sources.

Default fetchers for TemplateLoader: HTTP via httpx, and local files in JSON
or YAML.
"""

import asyncio
import json
import logging
from pathlib import Path
from typing import Any

import httpx
import yaml

from formbuilder.config import get_settings
from formbuilder.core.exceptions import TemplateLoadError, TemplateParseError
from formbuilder.models.contracts.templates import FormTemplate
from formbuilder.services.template_editor import parse_template_data
from formbuilder.services.template_loader import Fetch

logger = logging.getLogger(__name__)

YAML_SUFFIXES = (".yaml", ".yml")


def http_fetcher(client: httpx.AsyncClient | None = None) -> Fetch:
    """
    Build a fetcher that GETs template documents over HTTP.

    Args:
        client: Client to reuse; a short-lived client is created per fetch otherwise
    """
    async def fetch(url: str) -> str:
        logger.debug(f"Fetching template from {url}")
        if client is not None:
            response = await client.get(url)
            response.raise_for_status()
            return response.text

        async with httpx.AsyncClient(timeout=get_settings().fetch_timeout_seconds) as http:
            response = await http.get(url)
            response.raise_for_status()
            return response.text

    return fetch


def _decode_file(path: Path, text: str) -> Any:
    if path.suffix.lower() in YAML_SUFFIXES:
        try:
            return yaml.safe_load(text)
        except yaml.YAMLError as e:
            raise TemplateLoadError(str(path), f"Invalid YAML: {e}") from e
    return text


def file_fetcher() -> Fetch:
    """Build a fetcher that reads template documents from local files."""
    async def fetch(source: str) -> Any:
        path = Path(source)
        text = await asyncio.to_thread(path.read_text, encoding="utf-8")
        return _decode_file(path, text)

    return fetch


def read_template_file(source: str | Path) -> FormTemplate:
    """
    Read and validate a template file synchronously.

    Raises:
        TemplateLoadError: If the file cannot be read or is not a valid template
    """
    path = Path(source)
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise TemplateLoadError(str(path), str(e)) from e

    document = _decode_file(path, text)
    if isinstance(document, str):
        try:
            document = json.loads(document)
        except json.JSONDecodeError as e:
            raise TemplateLoadError(str(path), f"Invalid JSON: {e}") from e

    try:
        return parse_template_data(document)
    except TemplateParseError as e:
        raise TemplateLoadError(str(path), e.message) from e
