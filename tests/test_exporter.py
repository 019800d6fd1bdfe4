"""
Tests for measurement export
"""

import csv
import io
import json
from datetime import datetime

import pytest

from roof_measurement import __version__
from roof_measurement.data_models import ExportFormat
from roof_measurement.export.exporter import (
    PLANE_CSV_HEADER, SUMMARY_CSV_HEADER, MeasurementExporter, parse_json,
)


@pytest.fixture
def exporter():
    return MeasurementExporter()


class TestJsonExport:
    """Test suite for JSON export."""

    def test_json_round_trip(self, exporter, measurement):
        """Parsing a JSON export rebuilds an identical measurement."""
        content = exporter.export(measurement, 'json')
        assert parse_json(content) == measurement

    def test_export_info_block(self, exporter, measurement):
        document = json.loads(exporter.export(measurement, ExportFormat.JSON))
        info = document['export_info']

        assert info['format'] == 'json'
        assert info['version'] == __version__
        assert info['count'] == 1
        assert datetime.fromisoformat(info['timestamp']).tzinfo is not None

    def test_enums_serialized_as_values(self, exporter, measurement):
        document = json.loads(exporter.export(measurement, 'json'))
        plane = document['measurement']['planes'][1]

        assert plane['surface_type'] == 'dormer'
        assert document['measurement']['compliance']['status'] == 'pending'

    def test_parse_bare_measurement(self, measurement):
        assert parse_json(json.dumps(measurement.to_dict())) == measurement


class TestCsvExport:
    """Test suite for CSV export."""

    def test_one_row_per_plane_plus_total(self, exporter, measurement):
        content = exporter.export(measurement, 'csv')
        rows = list(csv.reader(io.StringIO(content)))

        assert rows[0] == PLANE_CSV_HEADER
        assert len(rows) == len(measurement.planes) + 3
        assert [r[0] for r in rows[1:4]] == ["primary-1", "dormer-1", "secondary-1"]
        assert rows[-1][0] == 'TOTAL'
        assert float(rows[-1][3]) == pytest.approx(measurement.total_area)
        assert float(rows[-1][4]) == pytest.approx(measurement.total_projected_area)

    def test_plane_row_formatting(self, exporter, measurement):
        rows = list(csv.reader(io.StringIO(exporter.export(measurement, 'csv'))))
        primary = rows[1]

        assert float(primary[3]) == pytest.approx(80.0)
        assert primary[5] == '0.0'
        assert primary[7] == '100.0%'
        assert primary[8] == '4'


class TestTextReport:
    """Test suite for the plain-text report."""

    def test_section_order(self, exporter, measurement):
        report = exporter.export(measurement, 'text_report')
        sections = ['ROOF MEASUREMENT REPORT', 'OVERVIEW:', 'PLANE DETAILS:',
                    'QUALITY METRICS:', 'DEVICE & COMPLIANCE:']

        positions = [report.index(s) for s in sections]
        assert positions == sorted(positions)

    def test_report_contents(self, exporter, measurement):
        report = exporter.export(measurement, 'text_report')

        assert f"Measurement ID: {measurement.id}" in report
        assert "Total Area: 116.00 sq m" in report
        assert "DORMER (dormer-1)" in report
        assert "Compliance Status: pending" in report


class TestExporterBehaviour:

    def test_unsupported_format(self, exporter, measurement):
        with pytest.raises(ValueError, match="Unsupported export format: xml"):
            exporter.export(measurement, 'xml')

    @pytest.mark.parametrize("fmt", list(ExportFormat))
    def test_export_leaves_measurement_and_trail_untouched(self, exporter, engine, measurement, fmt):
        before = measurement.to_dict()
        trail_length = len(engine.audit_trail)

        exporter.export(measurement, fmt)

        assert measurement.to_dict() == before
        assert len(engine.audit_trail) == trail_length

    def test_export_many_json(self, exporter, engine, three_plane_roof):
        measurements = [engine.compute(three_plane_roof, "s", "u") for _ in range(3)]
        document = json.loads(exporter.export_many(measurements, 'json'))

        assert document['export_info']['count'] == 3
        assert [m['id'] for m in document['measurements']] == [m.id for m in measurements]

    def test_export_many_csv(self, exporter, engine, three_plane_roof):
        measurements = [engine.compute(three_plane_roof, "s", "u") for _ in range(2)]
        rows = list(csv.reader(io.StringIO(exporter.export_many(measurements, 'csv'))))

        assert rows[0] == SUMMARY_CSV_HEADER
        assert len(rows) == 3
        assert rows[1][3] == '116.00'
        assert rows[1][4] == '1248.62'
        assert rows[1][5] == '3'

    def test_export_many_text(self, exporter, engine, three_plane_roof):
        measurements = [engine.compute(three_plane_roof, "s", "u") for _ in range(2)]
        content = exporter.export_many(measurements, 'text_report')
        assert content.count('ROOF MEASUREMENT REPORT') == 2
