import unittest

from courseplan.conflicts import parse_days, parse_hhmm, parse_meeting


class TestParseMeeting(unittest.TestCase):
    def test_mwf_morning(self) -> None:
        m = parse_meeting("MWF 9:00-9:50")

        self.assertIsNotNone(m)
        assert m is not None

        self.assertEqual(m.days, {"M", "W", "F"})
        self.assertEqual(m.start, 540)
        self.assertEqual(m.end, 590)

    def test_tuth_afternoon(self) -> None:
        m = parse_meeting("TuTh 14:00-15:20")

        self.assertIsNotNone(m)
        assert m is not None

        self.assertEqual(m.days, {"Tu", "Th"})
        self.assertEqual(m.start, 840)
        self.assertEqual(m.end, 920)

    def test_empty_and_blank_return_none(self) -> None:
        self.assertIsNone(parse_meeting(""))
        self.assertIsNone(parse_meeting("   "))

    def test_non_string_returns_none(self) -> None:
        self.assertIsNone(parse_meeting(None))
        self.assertIsNone(parse_meeting(900))

    def test_inverted_interval_returns_none(self) -> None:
        self.assertIsNone(parse_meeting("MWF 9:50-9:00"))

    def test_zero_length_interval_returns_none(self) -> None:
        self.assertIsNone(parse_meeting("MWF 9:00-9:00"))

    def test_missing_time_range_returns_none(self) -> None:
        self.assertIsNone(parse_meeting("MWF"))
        self.assertIsNone(parse_meeting("MWF 9:00"))
        self.assertIsNone(parse_meeting("MWF 9:00-"))

    def test_out_of_range_time_returns_none(self) -> None:
        self.assertIsNone(parse_meeting("MWF 24:00-25:00"))
        self.assertIsNone(parse_meeting("MWF 9:60-10:00"))

    def test_surrounding_whitespace_is_ignored(self) -> None:
        m = parse_meeting("  MWF   9:00-9:50 ")
        self.assertIsNotNone(m)
        assert m is not None
        self.assertEqual((m.start, m.end), (540, 590))

    def test_unknown_day_letters_are_dropped(self) -> None:
        m = parse_meeting("MTX 9:00-9:50")
        self.assertIsNotNone(m)
        assert m is not None
        self.assertEqual(m.days, {"M"})

    def test_no_valid_days_still_yields_meeting(self) -> None:
        """
        Current behavior: a meeting with an empty day set is produced.
        It can never overlap anything.
        """
        m = parse_meeting("XYZ 9:00-9:50")
        self.assertIsNotNone(m)
        assert m is not None
        self.assertEqual(m.days, frozenset())

    def test_zero_padded_times(self) -> None:
        m = parse_meeting("Sa 08:05-09:00")
        self.assertIsNotNone(m)
        assert m is not None
        self.assertEqual((m.start, m.end), (485, 540))

    def test_extra_tokens_are_ignored(self) -> None:
        """
        Current behavior: only the first two whitespace pieces and the first
        two hyphen pieces are used, anything after them is dropped.
        """
        for text in ("MWF 9:00-9:50 extra", "MWF 9:00-9:50-10:00"):
            m = parse_meeting(text)
            self.assertIsNotNone(m, text)
            assert m is not None
            self.assertEqual(m.days, {"M", "W", "F"})
            self.assertEqual((m.start, m.end), (540, 590))

    def test_tab_separator(self) -> None:
        m = parse_meeting("TuTh\t14:00-15:20")
        self.assertIsNotNone(m)
        assert m is not None
        self.assertEqual(m.days, {"Tu", "Th"})
        self.assertEqual((m.start, m.end), (840, 920))


class TestParseHelpers(unittest.TestCase):
    def test_parse_days_prefers_two_letter_tokens(self) -> None:
        self.assertEqual(parse_days("TuTh"), {"Tu", "Th"})
        self.assertEqual(parse_days("MTuWThF"), {"M", "Tu", "W", "Th", "F"})
        self.assertEqual(parse_days("SaSu"), {"Sa", "Su"})

    def test_single_t_is_not_a_day(self) -> None:
        self.assertEqual(parse_days("T"), frozenset())

    def test_parse_hhmm(self) -> None:
        self.assertEqual(parse_hhmm("9:00"), 540)
        self.assertEqual(parse_hhmm("14:20"), 860)
        self.assertEqual(parse_hhmm("0:00"), 0)
        self.assertEqual(parse_hhmm("23:59"), 1439)

    def test_parse_hhmm_rejects_bad_formats(self) -> None:
        self.assertIsNone(parse_hhmm("900"))
        self.assertIsNone(parse_hhmm("9:0"))
        self.assertIsNone(parse_hhmm("123:00"))
        self.assertIsNone(parse_hhmm("9:00pm"))
        self.assertIsNone(parse_hhmm("24:00"))


if __name__ == "__main__":
    unittest.main()
