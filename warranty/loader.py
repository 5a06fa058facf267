"""YAML loading and saving utilities for vehicle repair-order files."""

import json
from pathlib import Path
from typing import Any, Dict, List, Tuple, Union

import yaml

from .errors import InvalidVehicleFileError, VehicleNotFoundError
from .observability import get_logger
from .repair_order import RepairOrder
from .vehicle import Vehicle

logger = get_logger(__name__)

REPAIR_ORDER_KEYS = ("id", "retailDate", "openDate", "closeDate")


def _missing_keys(dct: Any) -> List[str]:
    if not isinstance(dct, dict):
        return list(REPAIR_ORDER_KEYS)
    return [key for key in REPAIR_ORDER_KEYS if key not in dct]


def _parse_object(dct: Dict[str, Any]) -> Union[RepairOrder, Vehicle, dict]:
    """Parse dictionary into appropriate object type."""
    # Repair order (inside 'repairOrders' list)
    if "openDate" in dct and "closeDate" in dct:
        missing = _missing_keys(dct)
        if missing:
            raise InvalidVehicleFileError(
                f"Repair order {dct.get('id', '?')} is missing {', '.join(missing)}"
            )
        return RepairOrder(
            dct["id"],
            dct["openDate"],
            dct["closeDate"],
            dct["retailDate"],
            dct.get("notes"),
        )
    # Top-level vehicle object; orders were parsed first, leftovers are incomplete
    elif "vin" in dct:
        orders = dct.get("repairOrders") or []
        for index, order in enumerate(orders):
            if not isinstance(order, RepairOrder):
                missing = ", ".join(_missing_keys(order))
                raise InvalidVehicleFileError(
                    f"Repair order #{index + 1} for VIN {dct['vin']} is missing {missing}"
                )
        return Vehicle(str(dct["vin"]), orders)
    else:
        return dct


def _read_yaml(filename: Union[str, Path]) -> Dict[str, Any]:
    with open(filename, "r") as fp:
        return yaml.load(fp, Loader=yaml.SafeLoader) or {}


def _write_yaml(filename: Union[str, Path], data: Dict[str, Any]) -> None:
    with open(filename, "w") as fp:
        yaml.dump(
            data,
            fp,
            default_flow_style=False,
            allow_unicode=True,
            sort_keys=False,
            width=120,
        )


def load_vehicle(filename: Union[str, Path]) -> Vehicle:
    """Load a vehicle from a YAML file."""
    with open(filename, "rb") as fp:
        # Unquoted YAML dates come back as date objects; default=str keeps ISO form
        json_data = json.dumps(yaml.load(fp, Loader=yaml.SafeLoader), default=str)
        vehicle = json.loads(json_data, object_hook=_parse_object)
    if not isinstance(vehicle, Vehicle):
        raise VehicleNotFoundError(f"{filename} is not a vehicle file (missing vin)")
    return vehicle


def get_vehicle_files(directory: Union[str, Path]) -> List[Path]:
    """All vehicle YAML files in a directory."""
    directory = Path(directory)
    return sorted(list(directory.glob("*.yaml")) + list(directory.glob("*.yml")))


def find_vehicle(directory: Union[str, Path], vin: str) -> Tuple[Path, Vehicle]:
    """
    Find the vehicle file for a VIN (case-insensitive).

    Raises VehicleNotFoundError when no file in the directory matches.
    Files that are not valid YAML are skipped with a warning.
    """
    wanted = vin.strip().lower()
    for path in get_vehicle_files(directory):
        try:
            data = _read_yaml(path)
        except yaml.YAMLError as e:
            logger.warning("skipping unreadable vehicle file", path=str(path), error=str(e))
            continue
        if isinstance(data, dict) and str(data.get("vin", "")).strip().lower() == wanted:
            return path, load_vehicle(path)
    raise VehicleNotFoundError(f"No vehicle found for VIN {vin.strip()}")


def _order_to_dict(order: RepairOrder) -> Dict[str, Any]:
    """Serialize a RepairOrder to the YAML dict format (camelCase keys)."""
    d: Dict[str, Any] = {
        "id": order.id,
        "retailDate": order.retail_date.isoformat(),
        "openDate": order.open_date.isoformat(),
        "closeDate": order.close_date.isoformat(),
    }
    if order.notes is not None:
        d["notes"] = order.notes
    return d


def save_repair_order(filename: Union[str, Path], order: RepairOrder) -> None:
    """
    Append a repair order to a vehicle YAML file.

    Loads the raw YAML, appends the order to the repairOrders list,
    and writes back to the file.
    """
    data = _read_yaml(filename)

    if data.get("repairOrders") is None:
        data["repairOrders"] = []

    data["repairOrders"].append(_order_to_dict(order))

    _write_yaml(filename, data)


def delete_repair_order(filename: Union[str, Path], order_id: int) -> None:
    """
    Remove the repair order with the given id from a vehicle YAML file.

    Raises KeyError when no order has that id.
    """
    data = _read_yaml(filename)

    orders = data.get("repairOrders") or []
    remaining = [o for o in orders if o.get("id") != order_id]
    if len(remaining) == len(orders):
        raise KeyError(f"Repair order {order_id} not found")

    data["repairOrders"] = remaining
    _write_yaml(filename, data)


def create_vehicle(filename: Union[str, Path], vin: str) -> None:
    """Create a new vehicle YAML file with no repair orders."""
    _write_yaml(filename, {"vin": vin.strip(), "repairOrders": []})
