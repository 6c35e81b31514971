"""
View models for the status display and floor panel.

Everything here is derived from a CarState snapshot and the controller's own
gating query; nothing is stored.
"""

from typing import Dict, List, Tuple

from simulator.core.car_state import CarState

DOOR_LEAF_WIDTH = 1.35  # meters, one leaf; also its full travel
DOOR_LEAF_CENTER = 0.675  # closed-position offset of each leaf from the car center


def door_leaf_offsets(progress: float, travel: float = DOOR_LEAF_WIDTH) -> Tuple[float, float]:
    """
    x positions of the left and right door leaves for a door progress.

    Returns:
        (left_x, right_x); leaves slide apart symmetrically.
    """
    offset = progress * travel
    return -DOOR_LEAF_CENTER - offset, DOOR_LEAF_CENTER + offset


def status_report(state: CarState) -> Dict:
    """Status display contents for one snapshot"""
    report = {
        "current_floor": state.current_floor,
        "state": state.phase.label,
        "moving": state.phase.is_moving,
        "velocity": f"{state.velocity:.2f} m/s",
        "position": f"{state.position:.2f} m",
        "target_floor": state.target_floor,
        "direction": None,
        "message": None,
    }
    if state.target_floor is not None:
        report["direction"] = "UP" if state.target_floor > state.current_floor else "DOWN"
        report["message"] = f"Going to floor {state.target_floor}"
    return report


def floor_panel(controller) -> List[Dict]:
    """
    One entry per floor button, top floor first.

    `selectable` comes from the controller's request gate, so the panel can
    never disagree with what select_floor would do.
    """
    state = controller.snapshot()
    return [
        {
            "floor": floor,
            "selectable": controller.is_selectable(floor),
            "is_current": floor == state.current_floor,
            "is_target": floor == state.target_floor,
        }
        for floor in reversed(range(controller.config.floor_count))
    ]


def system_parameters(config) -> Dict:
    """Engineering parameters shown next to the panel"""
    return {
        "floors": config.floor_count,
        "floor_height": config.floor_height,
        "max_speed": config.max_speed,
        "acceleration": config.acceleration,
        "deceleration": config.deceleration,
        "door_open_time_ms": config.door_open_time,
        "door_animation_time_ms": config.door_animation_time,
    }


def render_payload(controller, state: CarState = None) -> Dict:
    """Complete message for a viewer: raw state, status text, panel and door leaves"""
    state = state if state is not None else controller.snapshot()
    left_x, right_x = door_leaf_offsets(state.door_progress)
    return {
        "type": "car_status",
        "time": controller.now,
        "car": state.to_dict(),
        "status": status_report(state),
        "floors": floor_panel(controller),
        "doors": {"left_x": left_x, "right_x": right_x},
    }
