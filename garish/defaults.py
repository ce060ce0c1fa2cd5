DEFAULT_WIDTH = 80
DEFAULT_HEIGHT = 24
DEFAULT_INDENT = 2
DEFAULT_SHOW_INDENT = True
MIN_WIDTH = 1
INDENT_GUIDE = "│"
UNDEF_MESSAGE = "#undef"
