"""Cache regions, sentinel keys and rate-limit intervals."""

from __future__ import annotations

REGION_STYLES: str = "styles"
REGION_SCRIPTS: str = "scripts"
REGION_MANIFESTS: str = "manifests"
REGION_SENTINELS: str = "sentinels"

SENTINEL_VALUE: str = "1"
FILE_EXISTS_SENTINEL_PREFIX: str = "_bundlekit_check_file_exists_"
FILE_TOUCH_SENTINEL_PREFIX: str = "_bundlekit_check_file_touched_"
TRIM_SENTINEL_PREFIX: str = "_bundlekit_trim_"
TRIM_STARTUP_SENTINEL_PREFIX: str = "_bundlekit_trim_startup_"

FILE_EXISTS_CHECK_SECONDS: float = 60.0
FILE_TOUCH_INTERVAL_SECONDS: float = 6 * 60 * 60.0
TRIM_STARTUP_DELAY_SECONDS: float = 5 * 60.0
TRIM_INTERVAL_SECONDS: float = 7 * 60 * 60.0

SECONDS_PER_DAY: int = 24 * 60 * 60

OUTPUT_TEMP_PREFIX: str = ".tmp-"
OUTPUT_TEMP_SUFFIX: str = ".part"
