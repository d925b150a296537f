"""Command-line options of the compiler proper."""

from dataclasses import dataclass, field

__all__ = ["Options", "parse_command_line"]


@dataclass
class Options:
    """Settings taken from the command line."""

    ext_name: str = ".s"
    asm_file_name: str | None = None
    extra_white_space: list = field(default_factory=list)
    extra_keywords: list = field(default_factory=list)
    dump_ast: bool = False
    dump_ir: bool = False
    files: list = field(default_factory=list)


def _value(args, option):
    try:
        return next(args)
    except StopIteration:
        raise ValueError(f"option {option} requires an argument") from None


def parse_command_line(argv):
    """Parse options; the first argument that is not an option starts the file list."""
    options = Options()
    args = iter(argv)
    for arg in args:
        if arg.startswith("-ext:"):
            options.ext_name = arg[len("-ext:"):]
        elif arg == "-o":
            options.asm_file_name = _value(args, arg)
        elif arg == "-ignore":
            options.extra_white_space.extend(_value(args, arg).split(","))
        elif arg == "-keyword":
            options.extra_keywords.extend(_value(args, arg).split(","))
        elif arg == "--dump-ast":
            options.dump_ast = True
        elif arg == "--dump-IR":
            options.dump_ir = True
        else:
            options.files = [arg, *args]
            break
    return options