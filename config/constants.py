"""
Centralized constants for PageFlow.
All magic numbers of the conversion pipeline live here.
"""

# ===========================================
# PAGE FORMATS (CSS pixels @ 96 DPI)
# ===========================================
A4_WIDTH_PX = 794                     # 210mm
A4_HEIGHT_PX = 1123                   # 297mm
SLIDE_WIDTH_PX = 960                  # 10in
SLIDE_HEIGHT_PX = 540                 # 5.625in

# ===========================================
# UNIT CONVERSION
# ===========================================
TWIPS_PER_PX = 15                     # 1px = 1/96in = 15 twips
HALF_POINTS_PER_PX = 1.5              # 1px = 0.75pt = 1.5 half-points
MIN_HALF_POINTS = 2                   # 1pt floor for run size
EMU_PER_PX = 9525                     # 914400 EMU/in / 96
POINTS_PER_PX = 0.75

# ===========================================
# RENDERING
# ===========================================
NAVIGATION_TIMEOUT_MS = 60000         # page.set_content bound
DEVICE_SCALE_FACTOR = 2               # capture resolution multiplier
SCREENSHOT_TYPE = 'jpeg'
SCREENSHOT_QUALITY = 90
TEXT_HIDE_SETTLE_MS = 200             # wait after hiding text, before capture
BROWSER_ARGS = ['--no-sandbox', '--disable-setuid-sandbox']

# ===========================================
# STYLE DEFAULTS
# ===========================================
DEFAULT_COLOR_HEX = '000000'
DEFAULT_FONT_SIZE_PX = 16.0
DEFAULT_FONT_FAMILY = 'sans-serif'
DEFAULT_ALIGNMENT = 'left'
FALLBACK_RUN_FONT = 'Arial'
BOLD_WEIGHT_THRESHOLD = 600
NON_RENDERED_TAGS = ('SCRIPT', 'STYLE', 'NOSCRIPT')

# ===========================================
# PRINT-TO-PDF
# ===========================================
PDF_VIEWPORT_WIDTH = 1200
PDF_VIEWPORT_HEIGHT = 1600
PDF_DEFAULT_FORMAT = 'A4'
PDF_DEFAULT_MARGIN = '10mm'
SLIDE_PDF_WIDTH = '10in'
SLIDE_PDF_HEIGHT = '5.625in'

# ===========================================
# API / SERVER
# ===========================================
MAX_UPLOAD_SIZE_MB = 10               # upload limit
API_HOST = '127.0.0.1'
API_PORT = 3005
DOCX_MIME = 'application/vnd.openxmlformats-officedocument.wordprocessingml.document'
PDF_MIME = 'application/pdf'

# ===========================================
# LOGGING
# ===========================================
LOG_LEVEL = 'INFO'
LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
LOG_FILE = 'logs/pageflow.log'
LOG_MAX_SIZE_MB = 10
LOG_BACKUP_COUNT = 5
