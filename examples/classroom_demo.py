#!/usr/bin/env python3
"""
Classroom friction lab demonstration.

This script walks through a typical lesson:
- Weighing the block on the hanging scale
- Pulling it across dry and wet surfaces
- Rotating it to show friction does not depend on contact area
- Overloading the dynamometer with a heavy block

Usage:
    python examples/classroom_demo.py
"""

from pathlib import Path

from friction_lab import ContactOrientation, FrameDriver, StationPlacement, create_session, load_config
from friction_lab.logging_config import setup_logging
from friction_lab.simulation.physics import compute_theoretical


def measure(session, driver, placement):
    """Place the block, measure, and commit the result."""
    session.set_placement(placement)
    session.start_measurement()
    snapshot = driver.run_until_settled()
    session.commit_record()
    return snapshot


def main():
    config = load_config(Path("config/friction_lab.yml"))
    setup_logging(config)

    session = create_session(config)
    driver = FrameDriver(session)

    print("\n" + "="*60)
    print("FRICTION LAB DEMO")
    print("="*60)

    experiments = [
        (2.0, "wood", False, ContactOrientation.WIDE),
        (2.0, "wood", False, ContactOrientation.NARROW),
        (2.0, "wood", True, ContactOrientation.WIDE),
        (5.0, "rubber", True, ContactOrientation.WIDE),
        (20.0, "rubber", False, ContactOrientation.WIDE),
    ]

    for mass, material_id, is_wet, orientation in experiments:
        session.set_parameters(mass=mass, material_id=material_id, is_wet=is_wet, orientation=orientation)
        material = session.catalog.get(material_id)
        theory = compute_theoretical(mass, material.coefficient, is_wet)

        print(f"\n{material.display_name}, {mass} kg, {'wet' if is_wet else 'dry'}, {orientation.value} face")
        weighed = measure(session, driver, StationPlacement.WEIGHING_STATION)
        print(f"  P = {weighed.weight.text} N (theory {theory.weight:.2f} N)")
        pulled = measure(session, driver, StationPlacement.SLIDING_STATION)
        print(f"  F = {pulled.friction.text} N (theory {theory.friction_threshold:.2f} N)")
        session.reset_measurement()

    print("\nResults log (newest first):")
    for record in session.log:
        print(f"  #{record.id:<3} {record.material_name:<9} {record.mass:>5} kg  "
              f"P={record.weight_display:<9} F={record.friction_display}")


if __name__ == "__main__":
    main()
