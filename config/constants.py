"""
Centralized constants for the layout instruction stream.
All defaults shared between settings, builder and replay live here.
"""

# ===========================================
# STREAM FORMAT
# ===========================================
STREAM_FORMAT_VERSION = "1.0"         # bumped when to_dict() layout changes
CHECKSUM_LENGTH = 16                  # hex chars kept from sha256

# ===========================================
# SESSION DEFAULTS
# ===========================================
DEFAULT_FONT_FAMILY = "Helvetica"     # system font
DEFAULT_FONT_SIZE = 14.0              # system font size (pt)
DEFAULT_TEXT_COLOR = "000000"         # black
DEFAULT_IMAGE_ROW_SPACING = 5.0       # horizontal gap between images (pt)
DEFAULT_TEXT_LINE_SPACING = 1.0       # line spacing multiplier
DEFAULT_LINE_WIDTH = 0.25             # separator stroke width (pt)

# ===========================================
# COLUMN SECTIONS
# ===========================================
MIN_COLUMN_COUNT = 2                  # a column section needs more than one column

# ===========================================
# LOGGING
# ===========================================
LOG_LEVEL = 'INFO'
LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
LOG_FILE = None                       # e.g. 'logs/docstream.log'
LOG_MAX_SIZE_MB = 10
LOG_BACKUP_COUNT = 5
