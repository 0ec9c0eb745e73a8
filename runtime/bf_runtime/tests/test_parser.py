"""
Test suite for the BF parser
Verifies bracket matching, run-length merging and canonical formatting
"""

import pytest
import sys
import os

# Add grandparent directory to path for imports (to find bf_runtime package)
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__)))))

from bf_runtime.commands import is_command, strip_comments
from bf_runtime.errors import (
    BFParseError, BFInterpretError,
    DataPointerIncrementOverflow, DataPointerDecrementOverflow, UnmatchedSymbol,
    E_UNMATCHED_SYMBOL, E_POINTER_INCREMENT_OVERFLOW, E_POINTER_DECREMENT_OVERFLOW,
)
from bf_runtime.parser import (
    BFParser, parse_code, format_code,
    MovePointer, ModifyCell, WriteByte, ReadByte, Loop, Instruction,
)


class TestBasicInstructions:
    """Test single instructions"""

    def test_empty_source(self):
        assert parse_code('') == []

    def test_increment_pointer(self):
        assert parse_code('>') == [MovePointer(delta=1)]

    def test_decrement_pointer(self):
        assert parse_code('<') == [MovePointer(delta=-1)]

    def test_increment_cell(self):
        assert parse_code('+') == [ModifyCell(delta=1)]

    def test_decrement_cell(self):
        assert parse_code('-') == [ModifyCell(delta=-1)]

    def test_write(self):
        assert parse_code('.') == [WriteByte()]

    def test_read(self):
        assert parse_code(',') == [ReadByte()]

    def test_io_is_never_merged(self):
        assert parse_code('..,,') == [WriteByte(), WriteByte(), ReadByte(), ReadByte()]

    def test_empty_loop(self):
        assert parse_code('[]') == [Loop(body=[])]

    def test_nested_loops(self):
        assert parse_code('[[-]>]') == [
            Loop(body=[Loop(body=[ModifyCell(delta=-1)]), MovePointer(delta=1)])
        ]


class TestComments:
    """Test that non-command characters are ignored"""

    def test_text_only(self):
        assert parse_code('hello world\n\t') == []

    def test_comments_between_commands(self):
        assert parse_code('+ add one\n. print it') == [ModifyCell(delta=1), WriteByte()]

    def test_comments_do_not_break_runs(self):
        assert parse_code('+ + +') == [ModifyCell(delta=3)]

    def test_non_ascii(self):
        assert parse_code('++ é ✓ -') == [ModifyCell(delta=1)]

    def test_is_command(self):
        for char in '><+-.,[]':
            assert is_command(char)
        assert not is_command('a')
        assert not is_command('#')

    def test_strip_comments(self):
        assert strip_comments('a+b[c-]d.') == '+[-].'


class TestRunLengthMerging:
    """Test peephole merging of pointer and cell runs"""

    def test_pointer_run(self):
        assert parse_code('>>>>') == [MovePointer(delta=4)]

    def test_cell_run(self):
        assert parse_code('----') == [ModifyCell(delta=-4)]

    def test_opposite_pointer_shrinks(self):
        assert parse_code('>>><') == [MovePointer(delta=2)]

    def test_opposite_cell_shrinks(self):
        assert parse_code('+++--') == [ModifyCell(delta=1)]

    def test_pointer_crosses_zero(self):
        assert parse_code('><<') == [MovePointer(delta=-1)]

    @pytest.mark.parametrize('source', ['><', '<>', '+-', '-+', '>><<', '+-+-', '>+-<', '++>><<--'])
    def test_balanced_runs_cancel(self, source):
        assert parse_code(source) == []

    def test_cancellation_exposes_previous_tail(self):
        # `><` vanishes, so the second `+` merges with the first
        assert parse_code('+><+') == [ModifyCell(delta=2)]

    def test_different_kinds_not_merged(self):
        assert parse_code('+>+') == [ModifyCell(delta=1), MovePointer(delta=1), ModifyCell(delta=1)]

    def test_merging_stops_at_io(self):
        assert parse_code('+.+') == [ModifyCell(delta=1), WriteByte(), ModifyCell(delta=1)]

    def test_merging_stops_at_loop_boundary(self):
        assert parse_code('+[+]+') == [
            ModifyCell(delta=1), Loop(body=[ModifyCell(delta=1)]), ModifyCell(delta=1)
        ]

    def test_cell_run_keeps_magnitude_below_256(self):
        assert parse_code('+' * 255) == [ModifyCell(delta=255)]
        assert parse_code('+' * 128) == [ModifyCell(delta=128)]

    def test_cell_run_of_256_vanishes(self):
        assert parse_code('+' * 256) == []
        assert parse_code('-' * 512) == []

    def test_cell_run_wraps(self):
        assert parse_code('+' * 257) == [ModifyCell(delta=1)]
        assert parse_code('-' * 300) == [ModifyCell(delta=-44)]

    def test_long_pointer_run_does_not_wrap(self):
        assert parse_code('>' * 1000) == [MovePointer(delta=1000)]


class TestPointerOverflow:
    """Test pointer run overflow against a configured limit"""

    def test_run_at_limit(self):
        assert parse_code('>>>', pointer_limit=3) == [MovePointer(delta=3)]
        assert parse_code('<<<', pointer_limit=3) == [MovePointer(delta=-3)]

    def test_increment_overflow(self):
        with pytest.raises(DataPointerIncrementOverflow) as exc_info:
            parse_code('>>>>', pointer_limit=3)
        assert exc_info.value.code == E_POINTER_INCREMENT_OVERFLOW

    def test_decrement_overflow(self):
        with pytest.raises(DataPointerDecrementOverflow) as exc_info:
            parse_code('<<<<', pointer_limit=3)
        assert exc_info.value.code == E_POINTER_DECREMENT_OVERFLOW

    def test_single_move_checked_against_limit(self):
        with pytest.raises(DataPointerIncrementOverflow):
            parse_code('>', pointer_limit=0)
        with pytest.raises(DataPointerDecrementOverflow):
            parse_code('<', pointer_limit=0)

    def test_zero_limit_allows_cell_and_io(self):
        assert parse_code('+.', pointer_limit=0) == [ModifyCell(delta=1), WriteByte()]

    def test_separate_runs_do_not_overflow(self):
        code = parse_code('>>>.>>>', pointer_limit=3)
        assert code == [MovePointer(delta=3), WriteByte(), MovePointer(delta=3)]

    def test_class_interface(self):
        parser = BFParser('>>', pointer_limit=1)
        with pytest.raises(DataPointerIncrementOverflow):
            parser.parse()


class TestBrackets:
    """Test bracket matching"""

    def test_unclosed_loop(self):
        with pytest.raises(UnmatchedSymbol) as exc_info:
            parse_code('[+][')
        assert exc_info.value.symbol == '['

    def test_extra_close(self):
        with pytest.raises(UnmatchedSymbol) as exc_info:
            parse_code('[+]]')
        assert exc_info.value.symbol == ']'

    def test_close_reported_before_later_open(self):
        with pytest.raises(UnmatchedSymbol) as exc_info:
            parse_code(']][[')
        assert exc_info.value.symbol == ']'

    def test_deeply_unclosed(self):
        with pytest.raises(UnmatchedSymbol) as exc_info:
            parse_code('[[[]]')
        assert exc_info.value.symbol == '['

    def test_error_message(self):
        with pytest.raises(UnmatchedSymbol) as exc_info:
            parse_code('[')
        assert exc_info.value.code == E_UNMATCHED_SYMBOL
        assert str(exc_info.value) == '[E_UNMATCHED_SYMBOL] unmatched `[`'

    def test_parse_errors_are_not_interpret_errors(self):
        with pytest.raises(BFParseError) as exc_info:
            parse_code(']')
        assert not isinstance(exc_info.value, BFInterpretError)

    def test_deep_nesting(self):
        code = parse_code('[' * 3000 + ']' * 3000)
        depth = 0
        node = code[0]
        while node.body:
            node = node.body[0]
            depth += 1
        assert depth == 2999


class TestFormatting:
    """Test rendering instruction trees back to source"""

    def test_format_drops_comments(self):
        assert format_code(parse_code('+++ add three [-] clear')) == '+++[-]'

    def test_format_negative_runs(self):
        code = [MovePointer(delta=-2), ModifyCell(delta=-3), ReadByte(), WriteByte()]
        assert format_code(code) == '<<---,.'

    def test_format_nested(self):
        code = [Loop(body=[Loop(body=[]), MovePointer(delta=1)])]
        assert format_code(code) == '[[]>]'

    def test_format_reparses_to_same_tree(self, hello_world):
        code = parse_code(hello_world)
        assert parse_code(format_code(code)) == code

    def test_format_is_canonical(self):
        assert format_code(parse_code('+>-<<>+')) == '+>-<+'

    def test_format_rejects_unknown_nodes(self):
        with pytest.raises(TypeError):
            format_code([Instruction()])
