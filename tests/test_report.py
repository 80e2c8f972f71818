"""Tests for report building and formatting."""

import io

import pytest

from indices import PhaseError, Report, build_report, format_report, load, parse, write_report


class TestFormat:
    def test_two_decimals(self):
        report = Report(values={"X": 5.0, "Y": -1.0, "Z": 0.125})
        assert format_report(report) == ["X: 5.00", "Y: -1.00", "Z: 0.12"]

    def test_precision(self):
        report = Report(values={"X": 1.5})
        assert report.format(precision=0) == ["X: 2"]
        assert report.format(precision=3) == ["X: 1.500"]

    def test_write_report(self):
        out = io.StringIO()
        write_report(out, Report(values={"A": 1.0, "B": 2.0}))
        assert out.getvalue() == "A: 1.00\nB: 2.00\n"

    def test_empty(self):
        assert format_report(Report()) == []


class TestBuild:
    def test_declaration_order(self):
        db = load(parse("R|Q1|S\nR|B|+|Q1|Q1\nR|A|+|B|Q1\nQ|Q1|1\n"))
        db.evaluate_all()
        report = build_report(db)
        assert list(report.values) == ["B", "A"]

    def test_requires_evaluation(self):
        db = load(parse("R|A|S\n"))
        with pytest.raises(PhaseError):
            build_report(db)
