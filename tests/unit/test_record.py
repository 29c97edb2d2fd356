import sys
import unittest
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent))

from cardfixtures import make_request

from statcard_core.record import RECORD_FIELDS, decode_record, encode_record
from statcard_renderer import RecordDecodeError


class RecordTests(unittest.TestCase):
    def test_field_count(self):
        self.assertEqual(len(RECORD_FIELDS), 48)
        self.assertEqual(RECORD_FIELDS[-1][0], "output_path")

    def test_decode_encoded_request(self):
        request = make_request("/tmp/out card.png")
        self.assertEqual(decode_record(encode_record(request)), request)

    def test_total_hits_come_from_judgement_counts(self):
        lines = encode_record(make_request()).split("\n")
        lines[20] = "1"  # reported total hits
        decoded = decode_record("\n".join(lines))
        self.assertEqual(decoded.current.total_hits, 1_234_567)
        self.assertEqual(decoded.baseline.total_hits, 1_200_001)

    def test_empty_country_and_trailing_newline(self):
        lines = encode_record(make_request()).split("\n")
        lines[5] = ""
        decoded = decode_record("\n".join(lines) + "\n")
        self.assertEqual(decoded.country, "")
        self.assertEqual(decoded.output_path, Path("card.png"))

    def test_lines_after_output_path_are_ignored(self):
        record = encode_record(make_request("out.png")) + "\ntrailing-junk\nmore"
        self.assertEqual(decode_record(record).output_path, Path("out.png"))

    def test_no_baseline_sentinel(self):
        decoded = decode_record(encode_record(make_request(user_id=-1)))
        self.assertFalse(decoded.has_baseline)

    def test_missing_fields(self):
        lines = encode_record(make_request()).split("\n")[:30]
        with self.assertRaises(RecordDecodeError) as ctx:
            decode_record("\n".join(lines))
        self.assertEqual(ctx.exception.field, "cur.level")
        self.assertEqual(ctx.exception.line, 31)

    def test_bad_number(self):
        lines = encode_record(make_request()).split("\n")
        lines[3] = "osu"
        with self.assertRaises(RecordDecodeError) as ctx:
            decode_record("\n".join(lines))
        self.assertEqual(ctx.exception.field, "mode")
        self.assertIn("'osu'", str(ctx.exception))

    def test_empty_output_path(self):
        lines = encode_record(make_request()).split("\n")
        lines[-1] = "  "
        with self.assertRaises(RecordDecodeError):
            decode_record("\n".join(lines))


if __name__ == "__main__":
    unittest.main()
