"""Parsing of registry, package manifest and description documents.

All documents come from the network, so XML is read with defusedxml, which
rejects entity expansion and external references. Every problem surfaces as
ManifestParseError; nothing here catches it.
"""

import re
from xml.etree.ElementTree import Element, ParseError

import defusedxml.ElementTree as DefusedET
from defusedxml import DefusedXmlException

from plugin_index.core.exceptions import ManifestParseError
from plugin_index.core.types import (
    LanguageDescription,
    PluginDescription,
    PluginMetadata,
    Registry,
    Versioning,
)

_INTEGER = re.compile(r"-?[0-9]+")


def _parse_root(content: str, source: str, expected_tag: str) -> Element:
    try:
        root = DefusedET.fromstring(content)
    except (ParseError, DefusedXmlException) as e:
        raise ManifestParseError(source, f"invalid XML: {e}") from e

    if root.tag != expected_tag:
        raise ManifestParseError(
            source, f"expected root element <{expected_tag}>, found <{root.tag}>"
        )
    return root


def _text(element: Element, path: str) -> str | None:
    """Return stripped text at path, or None when missing or blank."""
    child = element.find(path)
    if child is None or child.text is None:
        return None
    text = child.text.strip()
    return text or None


def _required_text(element: Element, path: str, source: str) -> str:
    value = _text(element, path)
    if value is None:
        raise ManifestParseError(source, f"missing required element <{path}>")
    return value


def _optional_int(element: Element, path: str, source: str) -> int | None:
    value = _text(element, path)
    if value is None:
        return None
    if _INTEGER.fullmatch(value) is None:
        raise ManifestParseError(source, f"<{path}> must be an integer, got '{value}'")
    return int(value)


def parse_registry(content: str, source: str) -> Registry:
    """Parse a registry manifest.

    Args:
        content: XML text of the registry document
        source: Location text used in error messages

    Returns:
        Registry with its modules in document order (possibly empty)

    Raises:
        ManifestParseError: If the document is malformed or <group> is missing
    """
    root = _parse_root(content, source, "registry")
    group = _required_text(root, "group", source)

    modules: list[str] = []
    for module in root.iterfind("modules/module"):
        name = (module.text or "").strip()
        if not name:
            raise ManifestParseError(source, "empty <module> entry")
        modules.append(name)

    return Registry(
        group=group,
        modules=tuple(modules),
        version=_text(root, "version"),
        updated=_optional_int(root, "updated", source),
    )


def parse_plugin_metadata(content: str, source: str) -> PluginMetadata:
    """Parse a module package manifest.

    When <versions> is absent the release is the only known version.

    Raises:
        ManifestParseError: If <artifactId> or <versioning>/<release> is missing
    """
    root = _parse_root(content, source, "metadata")
    artifact_id = _required_text(root, "artifactId", source)

    versioning_element = root.find("versioning")
    if versioning_element is None:
        raise ManifestParseError(source, "missing required element <versioning>")
    release = _required_text(versioning_element, "release", source)

    versions = [
        version.text.strip()
        for version in versioning_element.iterfind("versions/version")
        if version.text and version.text.strip()
    ]
    if not versions:
        versions = [release]

    return PluginMetadata(
        artifact_id=artifact_id,
        group_id=_text(root, "groupId"),
        versioning=Versioning(
            release=release,
            versions=tuple(versions),
            last_updated=_optional_int(versioning_element, "lastUpdated", source),
        ),
    )


def parse_plugin_description(content: str, source: str) -> PluginDescription:
    """Parse a version description.

    Raises:
        ManifestParseError: If no <langDesc> with a <name> is present
    """
    root = _parse_root(content, source, "pluginDescription")

    languages: dict[str, LanguageDescription] = {}
    for lang_desc in root.iterfind("languages/langDesc"):
        lang = lang_desc.get("lang", "en").strip() or "en"
        languages[lang] = LanguageDescription(
            name=_required_text(lang_desc, "name", source),
            short_description=_text(lang_desc, "shortDesc"),
            full_description=_text(lang_desc, "fullDesc"),
        )

    if not languages:
        raise ManifestParseError(source, "no <langDesc> entries")

    return PluginDescription(languages=languages)
