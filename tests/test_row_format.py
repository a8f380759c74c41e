"""
Contract test for row truncation and padding
"""

import pytest

from machine_report.model import MetricRow
from machine_report.render.rows import fit, format_row


def test_label_is_right_padded() -> None:
    assert fit("HYPERVISOR", 13) == "HYPERVISOR   "


def test_long_value_is_truncated_with_ellipsis() -> None:
    """
    40-char value at width 32 -> 29 chars + "..."
    """
    value = "abcdefghij" * 4
    fitted = fit(value, 32)

    assert fitted == value[:29] + "..."
    assert len(fitted) == 32


def test_exact_width_is_untouched() -> None:
    assert fit("x" * 20, 20) == "x" * 20


def test_tiny_width_keeps_one_char() -> None:
    """
    Degenerate widths must not slice negatively
    """
    assert fit("LONG LABEL", 3) == "L..."
    assert fit("LONG LABEL", 1) == "L..."


def test_row_assembly() -> None:
    line = format_row(MetricRow("OS", "Debian 13"), 6, 20)

    assert line == "│ OS     │ Debian 13            │"


@pytest.mark.parametrize(
    "label,value",
    [
        ("", ""),
        ("OS", "Debian 13"),
        ("A VERY LONG LABEL NAME", "short"),
        ("CPU", "v" * 80),
    ],
)
def test_line_length_is_fixed(label, value) -> None:
    """
    Short or truncated, every row is label + data + 7 wide
    """
    line = format_row(MetricRow(label, value), 13, 32)

    assert len(line) == 13 + 32 + 7
    assert line.startswith("│ ")
    assert line.endswith(" │")
    assert line[13 + 3] == "│"


def test_empty_value_renders_blank_cell() -> None:
    line = format_row(MetricRow("", "10.0.0.1"), 5, 20)

    assert line == "│       │ 10.0.0.1             │"
