"""termview's CLI Implementation"""

from __future__ import annotations

import logging as _logging
import sys
from os.path import isdir
from typing import Any, Callable, List, Optional

from . import config, notify
from .cancel import CancellationChannel, run_interruptible
from .config import config_options
from .exceptions import RenderError, SourceError
from .exit_codes import FAILURE, INVALID_ARG, NO_VALID_SOURCE, SUCCESS
from .logging import init_log, log, log_exception
from .output import Output
from .playback import FrameSequencer, PlaybackMode
from .render import BlockRenderer
from .sources import STDIN, is_url, iter_dir, load_frames, open_image


def check_arg(
    name: str,
    check: Callable[[Any], Any],
    msg: str,
    *,
    fatal: bool = True,
) -> bool:
    """Performs generic argument value checks and outputs the given message if the
    argument value is invalid.

    Returns:
        ``True`` if valid, otherwise ``False``.

    ``None`` (i.e the argument was not given) is always valid.
    """
    value = getattr(args, name)
    valid = value is None or check(value)
    if not valid:
        flag = f"-{name}" if len(name) == 1 else f"--{name.replace('_', '-')}"
        notify.notify(
            f"{flag}: {msg} (got: {value!r})",
            notify.CRITICAL if fatal else notify.ERROR,
        )

    return bool(valid)


def get_targets(sources: List[str]) -> List[str]:
    """Expands directory sources into the image files within them.

    Other sources are returned as-is, to be validated when opened.
    """
    targets = []
    for source in sources:
        if source != STDIN and not is_url(source) and isdir(source):
            log(f"Scanning {source!r}", logger, verbose=True)
            images = list(
                iter_dir(source, recursive=args.recursive, show_hidden=args.all)
            )
            if not images:
                log(
                    f"{source!r} contains no readable images",
                    logger,
                    _logging.WARNING,
                )
            targets.extend(images)
        else:
            targets.append(source)

    return targets


def get_mode(n_targets: int) -> PlaybackMode:
    """Determines how animations are played."""
    if args.static:
        return PlaybackMode.STATIC
    if n_targets == 1 and args.loop and not args.once:
        return PlaybackMode.LOOP
    return PlaybackMode.ONCE


def display(
    source: str,
    renderer: BlockRenderer,
    mode: PlaybackMode,
    frame_duration: Optional[float],
    output: Output,
) -> None:
    """Draws (or plays) an image source.

    Raises:
        termview.exceptions.SourceError: The source can not be opened or decoded.
        termview.exceptions.RenderError: The image can not be converted or resized.
        KeyboardInterrupt: Interrupted by the user. The terminal has been cleaned up.
    """
    with open_image(source) as image:
        frames = load_frames(
            image,
            args.width,
            args.height,
            mirror=args.mirror,
            static=mode is PlaybackMode.STATIC,
        )

    if args.name:
        output.write(f"{'<stdin>' if source == STDIN else source}:\n")

    channel = CancellationChannel()
    sequencer = FrameSequencer(
        frames,
        renderer,
        mode=mode if frames.animated else PlaybackMode.STATIC,
        frame_duration=frame_duration,
        channel=channel,
        output=output,
    )
    run_interruptible(
        sequencer.play,
        channel,
        output=output,
        timeout=args.interrupt_timeout,
        name="Player",
    )


def main() -> int:
    """CLI execution sub-entry-point"""
    from .parsers import parser

    global args

    args = parser.parse_args()

    if not args.no_config:
        config.user_config_file = args.config
        config.init_config()

    init_log(
        (
            args.log_file
            if config_options["log file"].is_valid(args.log_file)
            else config_options.log_file
        ),
        getattr(_logging, args.log_level),
        args.debug,
        args.quiet,
        args.verbose,
        args.verbose_log,
    )

    for details in (
        ("width", lambda x: x > 0, "must be greater than zero"),
        ("height", lambda x: x > 0, "must be greater than zero"),
        ("x", lambda x: x >= 0, "must not be negative"),
        ("y", lambda x: x >= 0, "must not be negative"),
        ("frames_per_second", lambda x: x > 0.0, "must be greater than zero"),
    ):
        if not check_arg(*details):
            return INVALID_ARG

    for name, option in config_options.items():
        var_name = name.replace(" ", "_")
        value = getattr(args, var_name, None)
        # Not all config options have corresponding command-line arguments
        if value is None:
            setattr(args, var_name, option.value)
        elif not option.is_valid(value):
            arg_name = f"--{name.replace(' ', '-')}"
            notify.notify(
                f"{arg_name}: {option.error_msg} (got: {value!r})", notify.ERROR
            )
            notify.notify(
                f"{arg_name}: Using config value: {option.value!r}", notify.WARNING
            )
            setattr(args, var_name, option.value)

    renderer = BlockRenderer(
        transparent=args.transparent,
        method=args.color_mode,
        x=args.x,
        y=args.y,
        absolute_offset=args.absolute_offset,
    )
    log(f"Using the {renderer.method!r} color method", logger, verbose=True)

    frame_duration = (
        1 / args.frames_per_second if args.frames_per_second else args.frame_duration
    )

    targets = get_targets(args.sources or [STDIN])
    if not targets:
        log("No valid source!", logger, _logging.CRITICAL)
        return NO_VALID_SOURCE

    mode = get_mode(len(targets))
    log(f"Playing animations in {mode.name} mode", logger, verbose=True)

    output = Output(sys.stdout)
    failed = False
    for source in targets:
        try:
            display(source, renderer, mode, frame_duration, output)
        except (SourceError, RenderError) as e:
            failed = True
            log(f"{source!r}: {e}", logger, _logging.ERROR)
        except OSError:
            failed = True
            log_exception(f"Could not display {source!r}", logger, direct=True)
            notify.notify(f"{source!r}: Could not be displayed", notify.ERROR)

        if output.broken:
            log("Output closed, skipping remaining sources", logger, verbose=True)
            break

    return FAILURE if failed else SUCCESS


logger = _logging.getLogger(__name__)

# Set from within `main()`
args = None
