"""
Measurement Exporter

Serializes measurements to JSON, CSV or a plain-text report. Exporting never
mutates a measurement or writes audit entries; callers log exports through
the engine themselves.
"""

import csv
import io
import json
import logging
from typing import Any, Dict, List, Sequence, Union

from .. import __version__
from ..data_models import ExportFormat, Measurement, utc_now
from ..geometry.polygon import square_meters_to_square_feet

PLANE_CSV_HEADER = [
    'Plane ID', 'Type', 'Material', 'Area (sq m)', 'Projected Area (sq m)',
    'Pitch (deg)', 'Azimuth (deg)', 'Confidence', 'Boundary Points',
]

SUMMARY_CSV_HEADER = [
    'ID', 'Property', 'Date', 'Total Area (sq m)', 'Total Area (sq ft)',
    'Plane Count', 'Accuracy',
]


class MeasurementExporter:
    """Exports measurements in the supported text formats."""

    def __init__(self, indent: int = 2):
        self.indent = indent
        self.logger = logging.getLogger(__name__)

    def export(self, measurement: Measurement, fmt: Union[ExportFormat, str]) -> str:
        """
        Export a single measurement.

        Args:
            measurement: Measurement to export
            fmt: 'json', 'csv' or 'text_report'

        Returns:
            Serialized measurement

        Raises:
            ValueError: If the format is not supported
        """
        fmt = self._resolve_format(fmt)

        if fmt is ExportFormat.JSON:
            content = self._to_json(measurement)
        elif fmt is ExportFormat.CSV:
            content = self._to_csv(measurement)
        else:
            content = self._to_text_report(measurement)

        self.logger.debug(f"Exported {measurement.id} as {fmt.value} ({len(content)} chars)")
        return content

    def export_many(self, measurements: Sequence[Measurement], fmt: Union[ExportFormat, str]) -> str:
        """
        Export several measurements as one document.

        JSON wraps the measurements with an ``export_info`` block; CSV gives one
        summary row per measurement; text reports are concatenated.
        """
        fmt = self._resolve_format(fmt)

        if fmt is ExportFormat.JSON:
            document = {
                'export_info': self._export_info(fmt, count=len(measurements)),
                'measurements': [m.to_dict() for m in measurements],
            }
            return json.dumps(document, indent=self.indent, ensure_ascii=False)

        if fmt is ExportFormat.CSV:
            buffer = io.StringIO()
            writer = csv.writer(buffer, lineterminator='\n')
            writer.writerow(SUMMARY_CSV_HEADER)
            for m in measurements:
                writer.writerow([
                    m.id,
                    m.property_id,
                    m.timestamp.date().isoformat(),
                    f"{m.total_area:.2f}",
                    f"{square_meters_to_square_feet(m.total_area):.2f}",
                    len(m.planes),
                    f"{m.accuracy * 100:.1f}%",
                ])
            return buffer.getvalue()

        return '\n\n'.join(self._to_text_report(m) for m in measurements)

    def _resolve_format(self, fmt: Union[ExportFormat, str]) -> ExportFormat:
        try:
            return ExportFormat(fmt)
        except ValueError:
            raise ValueError(f"Unsupported export format: {fmt}")

    def _export_info(self, fmt: ExportFormat, count: int = 1) -> Dict[str, Any]:
        return {
            'timestamp': utc_now().isoformat(),
            'format': fmt.value,
            'version': __version__,
            'count': count,
        }

    def _to_json(self, measurement: Measurement) -> str:
        document = {
            'export_info': self._export_info(ExportFormat.JSON),
            'measurement': measurement.to_dict(),
        }
        return json.dumps(document, indent=self.indent, ensure_ascii=False)

    def _to_csv(self, measurement: Measurement) -> str:
        buffer = io.StringIO()
        writer = csv.writer(buffer, lineterminator='\n')
        writer.writerow(PLANE_CSV_HEADER)

        for plane in measurement.planes:
            writer.writerow([
                plane.id,
                plane.surface_type.value,
                plane.material.value if plane.material else 'unknown',
                plane.area,
                plane.projected_area,
                f"{plane.pitch_angle_deg:.1f}",
                f"{plane.azimuth_deg:.1f}",
                f"{plane.confidence * 100:.1f}%",
                len(plane.boundaries),
            ])

        writer.writerow([''] * len(PLANE_CSV_HEADER))
        writer.writerow(['TOTAL', '', '', measurement.total_area,
                         measurement.total_projected_area, '', '', '', ''])
        return buffer.getvalue()

    def _to_text_report(self, measurement: Measurement) -> str:
        qm = measurement.quality_metrics
        lines: List[str] = [
            'ROOF MEASUREMENT REPORT',
            '=======================',
            '',
            f"Measurement ID: {measurement.id}",
            f"Property: {measurement.property_id}",
            f"Date: {measurement.timestamp.isoformat()}",
            '',
            'OVERVIEW:',
            '---------',
            f"Total Area: {measurement.total_area:.2f} sq m",
            f"Projected Area: {measurement.total_projected_area:.2f} sq m",
            f"Plane Count: {len(measurement.planes)}",
            f"Accuracy: {measurement.accuracy * 100:.1f}%",
            '',
            'PLANE DETAILS:',
            '--------------',
        ]

        for index, plane in enumerate(measurement.planes, start=1):
            material = plane.material.value if plane.material else 'unknown'
            lines.extend([
                f"{index}. {plane.surface_type.value.upper()} ({plane.id})",
                f"   Material: {material}",
                f"   Area: {plane.area:.2f} sq m",
                f"   Projected Area: {plane.projected_area:.2f} sq m",
                f"   Perimeter: {plane.perimeter:.2f} m",
                f"   Pitch: {plane.pitch_angle_deg:.1f}°",
                f"   Azimuth: {plane.azimuth_deg:.1f}°",
                f"   Confidence: {plane.confidence * 100:.1f}%",
                '',
            ])

        lines.extend([
            'QUALITY METRICS:',
            '----------------',
            f"Overall Score: {qm.overall_score}",
            f"Tracking Stability: {qm.tracking_stability}",
            f"Point Density: {qm.point_density} points/sq m",
            f"Duration: {qm.duration_s:.3f} s",
            f"Lighting Quality: {qm.lighting_quality}",
            f"Movement Smoothness: {qm.movement_smoothness}",
            '',
            'DEVICE & COMPLIANCE:',
            '--------------------',
        ])
        for key, value in measurement.device_info.items():
            lines.append(f"{key}: {value}")
        lines.extend([
            f"Compliance Status: {measurement.compliance.status.value}",
            f"Standards: {', '.join(measurement.compliance.standards)}",
            f"Last Check: {measurement.compliance.last_check.isoformat()}",
            f"Next Check: {measurement.compliance.next_check.isoformat()}",
        ])

        return '\n'.join(lines)


def parse_json(content: str) -> Measurement:
    """
    Rebuild a Measurement from a JSON export.

    Accepts both the wrapped export document and a bare measurement object.
    """
    document = json.loads(content)
    data = document.get('measurement', document)
    return Measurement.from_dict(data)
