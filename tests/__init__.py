"""
Test suite for the Wheel Terrain Contact Simulation.

This package contains unit tests organized by component:
- test_wheel_params.py: Tests for WheelParams and WheelState
- test_terrain.py: Tests for the terrain height field
- test_contact_locator.py: Tests for the contact search
- test_dynamics.py: Tests for contact resolution and integration
- test_sparks.py: Tests for spark emission and the particle pool
- test_controls.py: Tests for the control input adapter
- test_simulation.py: Tests for simulation execution
- test_settling_analysis.py: Tests for settling analysis
- test_integration.py: Integration tests for full workflow
- test_logger.py: Tests for logging setup
"""
