"""CLI argument parsers"""

import argparse

from . import __version__
from .config import config_options

parser = argparse.ArgumentParser(
    prog="termview",
    formatter_class=argparse.RawDescriptionHelpFormatter,
    description="Display images and animations in a terminal",
    epilog=""" \

'--' should be used to separate positional arguments that begin with an '-' \
from options/flags, to avoid ambiguity.
For example, `$ termview [options] -- -image.jpg --image.png`

Images are drawn with unicode half blocks, two pixels per character cell, using \
24-bit color escape codes where the terminal advertises support for them \
(via the COLORTERM environment variable) or the 256-color palette otherwise.

FOOTNOTES:
  1. Width and height are in units of columns and lines respectively.
     If both are given, the image is resized to exactly that size. If only one is
     given, the other is determined by the aspect ratio of the image. If neither is
     given, the image is shrunk (never enlarged) to fit within the terminal.
  2. An animation is looped only when it's the only image to be displayed.
  3. Any event with a level lower than the specified one is not reported.
  4. Supports all image formats supported by `PIL.Image.open()`.
     See https://pillow.readthedocs.io/en/latest/handbook/image-file-formats.html for
     details.
""",
    add_help=False,  # '-h' is used for HEIGHT
)

# General
general = parser.add_argument_group("General Options")
general.add_argument(
    "--help",
    action="help",
    help="Show this help message and exit",
)
general.add_argument(
    "--version",
    action="version",
    version=__version__,
    help="Show the program version and exit",
)
general.add_argument(
    "--color",
    choices=("auto", "direct", "indexed"),
    dest="color_mode",
    help=(
        f"The color method (default: {config_options.color_mode}). "
        "'auto' uses 'direct' (24-bit) if the terminal supports it"
    ),
)
general.add_argument(
    "-n",
    "--name",
    action="store_true",
    help="Output the name of each source before its image",
)

# Drawing
draw_options = parser.add_argument_group("Drawing Options")
draw_options.add_argument(
    "-t",
    "--transparent",
    action="store_true",
    default=None,
    help="Leave transparent pixels uncolored, rather than drawing a checkerboard",
)
draw_options.add_argument(
    "-m",
    "--mirror",
    action="store_true",
    help="Flip each image horizontally",
)
draw_options.add_argument(
    "-x",
    type=int,
    default=0,
    metavar="N",
    help="Columns left blank before each image line (default: 0)",
)
draw_options.add_argument(
    "-y",
    type=int,
    default=0,
    metavar="N",
    help="Lines left blank above each image (default: 0)",
)
draw_options.add_argument(
    "--absolute-offset",
    action="store_true",
    help=(
        "Count -x and -y from the top-left corner of the terminal, rather than "
        "from the cursor"
    ),
)

# Sizing
size_options = parser.add_argument_group(
    "Sizing Options", "These apply to all images [1]"
)
size_options.add_argument(
    "-w",
    "--width",
    type=int,
    metavar="N",
    help="Image width",
)
size_options.add_argument(
    "-h",
    "--height",
    type=int,
    metavar="N",
    help="Image height",
)

# Animation
anim_options = parser.add_argument_group("Animation Options")
repeat_options = anim_options.add_mutually_exclusive_group()
repeat_options.add_argument(
    "-1",
    "--once",
    action="store_true",
    help="Play animations only once, rather than in a loop [2]",
)
repeat_options.add_argument(
    "-s",
    "--static",
    action="store_true",
    help="Show only the first frame of animations",
)
anim_options.add_argument(
    "-f",
    "--frames-per-second",
    type=float,
    metavar="N",
    help=(
        "The frame rate of all animations "
        "(default: determined per image from the metadata OR 10)"
    ),
)
anim_options.add_argument(
    "--interrupt-timeout",
    type=float,
    metavar="N",
    help=(
        "Time (in seconds) to wait for an animation to stop when interrupted "
        f"(default: {config_options.interrupt_timeout})"
    ),
)

# Directory sources
dir_options = parser.add_argument_group("Directory Options")
dir_options.add_argument(
    "-a",
    "--all",
    action="store_true",
    help="Include hidden file and directories",
)
dir_options.add_argument(
    "-r",
    "--recursive",
    action="store_true",
    help="Scan for images in sub-directories too",
)

# Config
config_options__ = parser.add_argument_group(
    "Config Options",
    "NOTE: These are mutually exclusive",
)
config_options_ = config_options__.add_mutually_exclusive_group()

config_options_.add_argument(
    "--config",
    metavar="FILE",
    help="The config file to use for this session (default: Searches XDG Base Dirs)",
)
config_options_.add_argument(
    "--no-config",
    action="store_true",
    help="Use the default configuration",
)

# Logging
log_options_ = parser.add_argument_group(
    "Logging Options",
    "NOTE: All these, except '-l/--log-file', are mutually exclusive",
)
log_options = log_options_.add_mutually_exclusive_group()

log_options_.add_argument(
    "-l",
    "--log-file",
    metavar="FILE",
    help=f"The file to write logs to (default: {config_options.log_file})",
)
log_options.add_argument(
    "--log-level",
    choices=("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"),
    default="WARNING",
    help="Logging level for the session (default: WARNING) [3]",
)
log_options.add_argument(
    "-q",
    "--quiet",
    action="store_true",
    help="No notifications, except fatal errors",
)
log_options.add_argument(
    "-v",
    "--verbose",
    action="store_true",
    help="More detailed event reporting. Also sets logging level to INFO",
)
log_options.add_argument(
    "--verbose-log",
    action="store_true",
    help="Like --verbose but only applies to the log file",
)
log_options.add_argument(
    "--debug",
    action="store_true",
    help="Implies --log-level=DEBUG with verbosity",
)

# Positional
parser.add_argument(
    "sources",
    nargs="*",
    metavar="source",
    help=(
        "Path(s) to local image(s) and/or directory(s) OR URLs [4]. "
        "If no source is given or the source is '-', the image is read from "
        "standard input."
    ),
)
