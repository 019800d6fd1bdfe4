"""
Main entry point for the Roof Measurement Engine

Reads a JSON file of roof planes, validates or measures them, and prints or
writes the result in the requested export format.
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List

from roof_measurement.data_models import AuditAction, Plane, to_primitive
from roof_measurement.estimation.material_estimator import MaterialEstimator
from roof_measurement.exceptions import RoofMeasurementError
from roof_measurement.export.exporter import MeasurementExporter
from roof_measurement.measurement.engine import RoofMeasurementEngine
from roof_measurement.utils.config_manager import ConfigManager


def load_planes(path: Path) -> List[Plane]:
    """Load planes from a JSON file holding a list or a {'planes': [...]} object."""
    with open(path, 'r', encoding='utf-8') as fh:
        data = json.load(fh)
    if isinstance(data, dict):
        data = data.get('planes', [])
    return [Plane.from_dict(item) for item in data]


def main(argv=None):
    """Main entry point for the roof measurement engine."""
    parser = argparse.ArgumentParser(
        description="Roof measurement geometry and estimation engine"
    )

    parser.add_argument(
        "--config",
        type=str,
        help="Path to configuration file"
    )

    parser.add_argument(
        "--input",
        type=str,
        required=True,
        help="JSON file containing roof planes"
    )

    parser.add_argument(
        "--session-id",
        type=str,
        default="cli-session",
        help="Measurement session identifier"
    )

    parser.add_argument(
        "--user-id",
        type=str,
        default="cli-user",
        help="User performing the measurement"
    )

    parser.add_argument(
        "--format",
        choices=["json", "csv", "text_report"],
        default="text_report",
        help="Export format"
    )

    parser.add_argument(
        "--output",
        type=str,
        help="Write the export to this file instead of stdout"
    )

    parser.add_argument(
        "--validate-only",
        action="store_true",
        help="Run pre-flight validation only"
    )

    parser.add_argument(
        "--materials",
        action="store_true",
        help="Also print a material estimate"
    )

    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging verbosity"
    )

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(levelname)s | %(name)s | %(message)s",
    )

    # Load configuration
    try:
        config = ConfigManager(args.config)
    except (FileNotFoundError, ValueError) as e:
        print(f"Error loading configuration: {e}", file=sys.stderr)
        return 1

    input_path = Path(args.input)
    if not input_path.exists():
        print(f"Input file does not exist: {args.input}", file=sys.stderr)
        return 1

    try:
        planes = load_planes(input_path)
    except (ValueError, KeyError) as e:
        print(f"Error reading planes: {e}", file=sys.stderr)
        return 1

    engine = RoofMeasurementEngine(config_manager=config)

    if args.validate_only:
        result = engine.validate_planes(planes)
        print(json.dumps(to_primitive(result), indent=2, ensure_ascii=False))
        return 0 if result.is_valid else 2

    try:
        measurement = engine.compute(planes, args.session_id, args.user_id)
    except RoofMeasurementError as e:
        print(f"Measurement failed: {e}", file=sys.stderr)
        return 2

    content = MeasurementExporter().export(measurement, args.format)
    engine.log_action(AuditAction.EXPORT, args.user_id, args.session_id,
                      f"Exported measurement {measurement.id} as {args.format}")

    if args.output:
        output_path = Path(args.output)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(content, encoding='utf-8')
        print(f"Wrote {args.format} export to {output_path}")
    else:
        print(content)

    if args.materials:
        calculation = MaterialEstimator(engine.config, config).estimate(measurement)
        print(json.dumps(to_primitive(calculation), indent=2, ensure_ascii=False))

    return 0


if __name__ == "__main__":
    sys.exit(main())
