"""
Simulator Tests

Tests for the single-car controller:
- State machine transitions and the closing pass-through
- Kinematics (trapezoidal profile, exact arrival)
- Door sequencing and the auto-close timer
- Request gate admission rules
- Tick scheduling
"""
