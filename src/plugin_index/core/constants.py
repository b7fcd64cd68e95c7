"""Shared constants for registry layout and preference keys."""

# File names fixed by the registry layout convention
MANIFEST_FILE_NAME = "package-manifest.xml"
DESCRIPTION_FILE_NAME = "description.xml"
REGISTRY_FILE_NAME = "registry.xml"

DEFAULT_REGISTRY_LOCATION = "https://plugins.example.com/registry/" + REGISTRY_FILE_NAME

KEY_PREFIX = "plugin_index."
REGISTRIES_KEY = KEY_PREFIX + "registries"
DOWNLOAD_CACHE_PATH_KEY = KEY_PREFIX + "download_cache_path"
VERBOSE_LOGGING_KEY = KEY_PREFIX + "verbose_logging"
SHOW_INSTALL_FILES_KEY = KEY_PREFIX + "show_install_files"
DEFAULT_REGISTRY_KEY = KEY_PREFIX + "default_registry"

PLUGIN_INDEX_HOME_ENV = "PLUGIN_INDEX_HOME"
