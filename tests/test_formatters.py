"""Tests for troopstats.formatters module."""

import math

import discord

from troopstats.formatters import (
    NO_EVENTS_TEXT,
    REPORT_FILENAME,
    build_embed,
    build_legend,
    colorize,
    format_cell,
    format_kd,
    render_table,
)
from troopstats.models import COLUMNS, DisplayRow
from troopstats.stats import run_report

SAMPLE_LOG = "North (Alice) attacked South (Bob) killing 5 losing 2\nBob received 3 troops"


class TestFormatKd:
    """Tests for format_kd function."""

    def test_infinite(self):
        assert format_kd(math.inf) == "Infinity"

    def test_zero(self):
        assert format_kd(0) == "0"

    def test_nonzero_ratio_rounding_to_zero(self):
        assert format_kd(0.0) == "0.00"

    def test_nan(self):
        assert format_kd(math.nan) == "NaN"

    def test_two_decimals(self):
        assert format_kd(2.5) == "2.50"
        assert format_kd(0.33) == "0.33"
        assert format_kd(3.0) == "3.00"


class TestFormatCell:
    """Tests for format_cell function."""

    def test_string_passes_through(self):
        assert format_cell("Alice") == "Alice"

    def test_int(self):
        assert format_cell(12) == "12"

    def test_int_zero_kd(self):
        assert format_cell(0) == "0"

    def test_float_uses_kd_format(self):
        assert format_cell(0.4) == "0.40"
        assert format_cell(math.inf) == "Infinity"

    def test_nan_troops_gained(self):
        assert format_cell(math.nan) == "NaN"


class TestColorize:
    """Tests for colorize function."""

    def test_known_color(self):
        assert colorize("Bob", "red") == "\x1b[31mBob\x1b[0m"

    def test_unknown_color(self):
        assert colorize("Bob", "chartreuse") == "Bob"

    def test_no_color(self):
        assert colorize("Bob", None) == "Bob"


class TestRenderTable:
    """Tests for render_table function."""

    def test_header_and_separator(self):
        rows, columns = run_report(SAMPLE_LOG)
        lines = render_table(rows, columns).splitlines()

        assert len(lines) == 4
        assert lines[0].startswith("Name ")
        assert "Troops Gained" in lines[0]
        assert "Defense KD" in lines[0]
        assert set(lines[1]) <= {"-", "+"}

    def test_rows_in_order_and_aligned(self):
        rows, columns = run_report(SAMPLE_LOG)
        lines = render_table(rows, columns).splitlines()

        assert lines[2].startswith("Alice")
        assert lines[3].startswith("Bob  ")
        assert len({len(line) for line in lines}) == 1

    def test_kd_values_rendered(self):
        rows, columns = run_report(SAMPLE_LOG)
        table = render_table(rows, columns)
        assert "2.50" in table
        assert "0.40" in table

    def test_small_nonzero_kd_keeps_decimals(self):
        log = "\n".join(
            [
                "(A) attacked (B) killing 1 losing 99",
                "(A) attacked (B) killing 0 losing 99",
                "(A) attacked (B) killing 0 losing 99",
            ]
        )
        rows, columns = run_report(log)
        cells = [c.strip() for c in render_table(rows, columns).splitlines()[2].split("|")]
        assert cells[7] == "0.00"

    def test_colors_applied_to_matching_cells(self):
        rows, columns = run_report(SAMPLE_LOG)
        lines = render_table(rows, columns, {"Alice": "red"}).splitlines()

        assert lines[2].startswith("\x1b[31mAlice\x1b[0m")
        assert "\x1b[" not in lines[3]

    def test_colors_pad_before_escape(self):
        rows, columns = run_report(SAMPLE_LOG)
        lines = render_table(rows, columns, {"Bob": "blue"}).splitlines()
        assert lines[3].startswith("\x1b[34mBob  \x1b[0m")

    def test_empty_rows(self):
        lines = render_table([], COLUMNS).splitlines()
        assert len(lines) == 2


class TestBuildLegend:
    """Tests for build_legend function."""

    def test_one_line_per_column(self):
        legend = build_legend(COLUMNS)
        lines = legend.splitlines()
        assert len(lines) == len(COLUMNS)
        assert lines[0] == "**Name**: Player's username"

    def test_fits_embed_field(self):
        assert len(build_legend(COLUMNS)) <= 1024


class TestBuildEmbed:
    """Tests for build_embed function."""

    def test_table_in_description(self):
        rows, columns = run_report(SAMPLE_LOG)
        embed, file = build_embed(rows, columns)

        assert isinstance(embed, discord.Embed)
        assert file is None
        assert embed.title == "Troop Stats"
        assert embed.description.startswith("```ansi\n")
        assert "Alice" in embed.description
        assert embed.fields[0].name == "Columns"
        assert embed.footer.text == "2 players"

    def test_empty_rows(self):
        embed, file = build_embed([], COLUMNS)
        assert embed.description == NO_EVENTS_TEXT
        assert file is None
        assert embed.fields == []

    def test_large_table_sent_as_file(self):
        rows = [
            DisplayRow(f"Player{i:04d}", i, i, i, 1.0, i, i, 1.0, 0, 0, 0)
            for i in range(200)
        ]
        embed, file = build_embed(rows, COLUMNS)

        assert isinstance(file, discord.File)
        assert file.filename == REPORT_FILENAME
        assert REPORT_FILENAME in embed.description
        assert embed.footer.text == "200 players"
