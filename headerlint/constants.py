"""Constants shared by the header rule, configuration, and licensing helpers."""

from __future__ import annotations

from typing import Tuple

CONFIG_FILENAME = ".headerlint.yml"
COMPOSER_FILENAME = "composer.json"

COPYRIGHT_FILENAME = "COPYRIGHT.md"
LICENSE_FILENAME = "LICENSE.md"
DEFAULT_SKIP_FILES: Tuple[str, ...] = (LICENSE_FILENAME, COPYRIGHT_FILENAME)

HEADER_METRIC = "File has file-level DocBlock"

SOURCE_LINK_TEMPLATE = "https://github.com/{repository} for the canonical source repository"
COPYRIGHT_LINK_TEMPLATE = "https://github.com/{repository}/blob/master/" + COPYRIGHT_FILENAME + " Copyright"
LICENSE_LINK_TEMPLATE = "https://github.com/{repository}/blob/master/" + LICENSE_FILENAME + " New BSD License"

DEFAULT_MAX_FIXER_PASSES = 50
