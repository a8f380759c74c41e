"""TR-200 machine report: host metrics rendered as a box-drawing table."""
