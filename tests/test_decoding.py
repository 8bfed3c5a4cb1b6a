from decimal import Decimal
import unittest

from splits_MultiTimerReader.core.errors import CorruptData, FormatMismatch, TruncatedData
from splits_MultiTimerReader.core.model import ProgramId
from splits_MultiTimerReader.core.normalize import parse_clock, parse_count, parse_seconds, to_float
from splits_MultiTimerReader.core.segments import (
    RowLayout, SegmentRecord, build_segments, decode_binary_record, decode_delimited_record,
)

from tests.splitfiles import java_millis, java_string


class ClockTests(unittest.TestCase):
    def test_clock_shapes(self):
        self.assertEqual(Decimal("83.45"), parse_clock("83.45"))
        self.assertEqual(Decimal("83.45"), parse_clock("1:23.45"))
        self.assertEqual(Decimal("83.456"), parse_clock("00:01:23.4560000"))
        self.assertEqual(Decimal("93784.5"), parse_clock("1.02:03:04.5"))
        self.assertEqual(Decimal("-1.5"), parse_clock("-00:00:01.5000000"))

    def test_empty_clock_is_none(self):
        for text in (None, "", "  ", "-"):
            self.assertIsNone(parse_clock(text))

    def test_bad_clock_is_corrupt(self):
        with self.assertRaises(CorruptData):
            parse_clock("1:2:3:4")
        with self.assertRaises(CorruptData):
            parse_seconds("NaN")
        with self.assertRaises(CorruptData):
            parse_count("-3")

    def test_seconds_are_plain_decimals(self):
        self.assertEqual(Decimal("-0.5"), parse_seconds("-0.5"))
        for text in ("1e5", "1E-3", "Infinity", "+2", ".5"):
            with self.assertRaises(CorruptData):
                parse_seconds(text)

    def test_float_overflow_is_corrupt(self):
        self.assertEqual(1.5, to_float(Decimal("1.5")))
        with self.assertRaises(CorruptData):
            to_float(Decimal("1e400"))

    def test_corruption_is_a_mismatch(self):
        self.assertTrue(issubclass(CorruptData, FormatMismatch))
        self.assertTrue(issubclass(TruncatedData, FormatMismatch))


class BinaryRecordTests(unittest.TestCase):
    def test_record_and_next_offset(self):
        data = b"\x73" + java_string("Heat Man") + java_millis(40000) + java_millis(42500) + b"tail"
        rec, nxt = decode_binary_record(data, 0)

        self.assertEqual(SegmentRecord("Heat Man", Decimal("42.5"), Decimal("40")), rec)
        self.assertEqual(len(data) - 4, nxt)

    def test_insufficient_bytes_differs_from_corruption(self):
        with self.assertRaises(TruncatedData):
            decode_binary_record(b"\x73\x74\x00\x05ab", 0)
        with self.assertRaises(CorruptData):
            decode_binary_record(b"\x99" + java_string("x") + b"\x70\x70", 0)
        with self.assertRaises(CorruptData):
            decode_binary_record(b"\x73" + java_string("x") + java_millis(-5) + b"\x70", 0)


class DelimitedRecordTests(unittest.TestCase):
    def test_blank_lines_are_skipped(self):
        lines = ["", "  ", "Lobby,0,84.5,81.3"]
        rec, nxt = decode_delimited_record(lines, 0, sep=",", parse_time=parse_seconds,
                                           columns=RowLayout(name=0, time=2, best=3))
        self.assertEqual("Lobby", rec.name)
        self.assertEqual(Decimal("84.5"), rec.time)
        self.assertEqual(3, nxt)

    def test_zero_best_means_none(self):
        rec, _ = decode_delimited_record(["a,10,0"], 0, sep=",", parse_time=parse_seconds)
        self.assertIsNone(rec.best)

    def test_short_row_and_exhausted_input(self):
        with self.assertRaises(CorruptData):
            decode_delimited_record(["only-a-name"], 0, sep=",", parse_time=parse_seconds)
        with self.assertRaises(TruncatedData):
            decode_delimited_record(["a,1,1", ""], 1, sep=",", parse_time=parse_seconds)


class BuildSegmentsTests(unittest.TestCase):
    def test_cumulative_differences_are_exact(self):
        recs = [SegmentRecord("a", Decimal("84.5"), None), SegmentRecord("b", Decimal("170.2"), None)]
        self.assertEqual([84.5, 85.7], [s.duration for s in build_segments(recs, cumulative=True)])

    def test_going_backwards_is_corrupt(self):
        recs = [SegmentRecord("a", Decimal("20"), None), SegmentRecord("b", Decimal("10"), None)]
        with self.assertRaises(CorruptData):
            build_segments(recs, cumulative=True)


class ProgramIdTests(unittest.TestCase):
    def test_lookup(self):
        self.assertIs(ProgramId.LIVESPLIT, ProgramId.lookup("livesplit"))
        self.assertIs(ProgramId.LIVESPLIT, ProgramId.lookup("LIVESPLIT"))
        self.assertIs(ProgramId.URN, ProgramId.lookup(ProgramId.URN))
        self.assertIsNone(ProgramId.lookup("notepad"))
        self.assertIsNone(ProgramId.lookup(None))

    def test_extensions(self):
        self.assertEqual("lss", ProgramId.LIVESPLIT.file_extension)
        self.assertEqual("wsplit", ProgramId.WSPLIT.file_extension)


if __name__ == "__main__":
    unittest.main()
