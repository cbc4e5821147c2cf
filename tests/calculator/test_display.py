"""
Unit tests for number text helpers and the display formatter.
"""
import math
import unittest

from app.projects.calculator.core.display import format_number, preview_line, render
from app.projects.calculator.core.engine import CalculatorEngine, Operator
from app.projects.calculator.core.numbers import number_to_text, parse_operand, round9


class TestParseOperand(unittest.TestCase):

    def test_plain_numbers(self):
        self.assertEqual(parse_operand("42"), 42.0)
        self.assertEqual(parse_operand("-7.25"), -7.25)
        self.assertEqual(parse_operand("1e+21"), 1e21)

    def test_partial_entry(self):
        self.assertEqual(parse_operand("3."), 3.0)
        self.assertEqual(parse_operand(".5"), 0.5)

    def test_unparseable(self):
        self.assertIsNone(parse_operand(""))
        self.assertIsNone(parse_operand("."))
        self.assertIsNone(parse_operand("-"))


class TestRoundAndText(unittest.TestCase):

    def test_round9(self):
        self.assertEqual(round9(0.1 + 0.2), 0.3)
        self.assertEqual(round9(1 / 3), 0.333333333)
        self.assertEqual(round9(1e300), 1e300)

    def test_integral_values_have_no_fraction(self):
        self.assertEqual(number_to_text(8.0), "8")
        self.assertEqual(number_to_text(-0.0), "0")
        self.assertEqual(number_to_text(1e20), "100000000000000000000")

    def test_small_and_large_use_exponent(self):
        self.assertEqual(number_to_text(1e21), "1e+21")
        self.assertEqual(number_to_text(1e-7), "1e-7")
        self.assertEqual(number_to_text(0.00005), "0.00005")


class TestFormatNumber(unittest.TestCase):

    def test_grouping(self):
        self.assertEqual(format_number("1234567"), "1,234,567")
        self.assertEqual(format_number("-1234.5"), "-1,234.5")

    def test_keeps_trailing_decimal_point(self):
        self.assertEqual(format_number("12."), "12.")
        self.assertEqual(format_number("0.000"), "0.000")

    def test_long_text_uses_scientific(self):
        self.assertEqual(format_number("1234567890123456789"), "1.234568e+18")
        self.assertEqual(format_number("0.1234567890123456"), "1.234568e-1")

    def test_exponent_text_uses_scientific(self):
        self.assertEqual(format_number("1e+308"), "1.000000e+308")
        self.assertEqual(format_number("1e-7"), "1.000000e-7")

    def test_bare_decimal_point(self):
        self.assertEqual(format_number("."), ".")


class TestPreviewLine(unittest.TestCase):

    def setUp(self):
        self.engine = CalculatorEngine()

    def test_empty_without_operator(self):
        self.assertEqual(preview_line(self.engine), "")

    def test_operator_pending_no_right_operand(self):
        self.engine.current_operand = "1200"
        self.engine.choose_operator(Operator.Multiply)
        self.assertEqual(preview_line(self.engine), "1,200 ×")

    def test_live_preview(self):
        self.engine.current_operand = "0.1"
        self.engine.choose_operator(Operator.Add)
        self.engine.input_digit("0")
        self.engine.input_digit(".")
        self.engine.input_digit("2")
        self.assertEqual(preview_line(self.engine), "0.1 + 0.2 = 0.3")

    def test_divide_by_zero_shows_operand_without_result(self):
        self.engine.current_operand = "5"
        self.engine.choose_operator(Operator.Divide)
        self.engine.input_digit("0")
        self.assertEqual(preview_line(self.engine), "5 ÷ 0")

    def test_infinite_preview_shows_operand_without_result(self):
        self.engine.current_operand = "1e+308"
        self.engine.choose_operator(Operator.Multiply)
        self.engine.input_digit("1")
        self.engine.input_digit("0")
        self.assertEqual(self.engine.preview_result(), float("inf"))
        line = preview_line(self.engine)
        self.assertEqual(line, "1.000000e+308 × 10")
        self.assertNotIn("=", line)

    def test_nan_preview_shows_operand_without_result(self):
        self.engine.current_operand = "9" * 400
        self.engine.choose_operator(Operator.Subtract)
        self.engine.current_operand = "9" * 400
        self.assertTrue(math.isnan(self.engine.preview_result()))
        self.assertEqual(preview_line(self.engine), "inf - inf")


class TestRender(unittest.TestCase):

    def test_initial(self):
        display = render(CalculatorEngine())
        self.assertEqual(display["current"], "0")
        self.assertEqual(display["previous"], "")
        self.assertIsNone(display["operation"])
        self.assertIsNone(display["error"])

    def test_empty_operand_renders_zero(self):
        engine = CalculatorEngine()
        engine.choose_operator(Operator.Subtract)
        display = render(engine)
        self.assertEqual(display["current"], "0")
        self.assertEqual(display["operation"], "subtract")
        self.assertEqual(display["previous"], "0 -")

    def test_error(self):
        display = render(CalculatorEngine(), error="Cannot divide by zero!")
        self.assertEqual(display["current"], "Error")
        self.assertEqual(display["previous"], "Cannot divide by zero!")
        self.assertEqual(display["error"], "Cannot divide by zero!")
