import pytest

from uclc.options import Options, parse_command_line


def test_defaults():
    opts = parse_command_line([])
    assert opts == Options()
    assert opts.ext_name == ".s"
    assert opts.asm_file_name is None
    assert opts.files == []


def test_extension():
    assert parse_command_line(["-ext:.asm"]).ext_name == ".asm"


def test_output_and_files():
    opts = parse_command_line(["-o", "out.s", "a.i", "b.i"])
    assert opts.asm_file_name == "out.s"
    assert opts.files == ["a.i", "b.i"]


def test_ignore_splits_on_commas():
    opts = parse_command_line(["-ignore", "__inline,__fastcall", "x.i"])
    assert opts.extra_white_space == ["__inline", "__fastcall"]
    assert opts.files == ["x.i"]


def test_keywords_accumulate():
    opts = parse_command_line(["-keyword", "__int64", "-keyword", "a,b"])
    assert opts.extra_keywords == ["__int64", "a", "b"]


def test_dump_flags():
    opts = parse_command_line(["--dump-ast", "--dump-IR"])
    assert opts.dump_ast is True
    assert opts.dump_ir is True


def test_options_after_first_file_are_files():
    opts = parse_command_line(["a.i", "--dump-ast"])
    assert opts.files == ["a.i", "--dump-ast"]
    assert opts.dump_ast is False


@pytest.mark.parametrize("option", ["-o", "-ignore", "-keyword"])
def test_missing_argument(option):
    with pytest.raises(ValueError):
        parse_command_line([option])