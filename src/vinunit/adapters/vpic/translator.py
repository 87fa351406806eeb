"""Translate vPIC decode payloads into :class:`Vehicle` records.

Both vPIC dialects are reduced to ``(name, value)`` pairs first. A single table
then maps every vehicle field to its spaced ``DecodeVin`` variable name and its
camel-case ``DecodeVinValues`` key, so the two dialects produce identical
records for identical data.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime
from enum import Enum
from typing import TYPE_CHECKING, Final

from vinunit.config.vpic import VinDecodeDialect
from vinunit.domain.model import Vehicle

if TYPE_CHECKING:
    from collections.abc import Iterable

    from .schema import DecodeVinResponse, DecodeVinValuesResponse

type DecodePair = tuple[str, str | None]


class FieldKind(Enum):
    TEXT = "text"
    INT = "int"
    FLOAT = "float"


@dataclass(frozen=True, slots=True)
class FieldMapping:
    field: str
    variable: str
    value_key: str
    kind: FieldKind = FieldKind.TEXT

    def source_name(self, dialect: VinDecodeDialect) -> str:
        return self.variable if dialect is VinDecodeDialect.VARIABLE else self.value_key


_TEXT = FieldKind.TEXT
_INT = FieldKind.INT
_FLOAT = FieldKind.FLOAT

# DecodeVin reports ids in ValueId; these rows surface them as their own pairs.
_ID_VARIABLES: Final[dict[str, str]] = {
    "Make": "Make ID",
    "Model": "Model ID",
    "Manufacturer Name": "Manufacturer ID",
}

FIELD_MAPPINGS: Final[tuple[FieldMapping, ...]] = (
    FieldMapping("year", "Model Year", "ModelYear", _INT),
    FieldMapping("make", "Make", "Make"),
    FieldMapping("make_id", "Make ID", "MakeID", _INT),
    FieldMapping("manufacturer", "Manufacturer Name", "Manufacturer"),
    FieldMapping("manufacturer_id", "Manufacturer ID", "ManufacturerId", _INT),
    FieldMapping("model", "Model", "Model"),
    FieldMapping("model_id", "Model ID", "ModelID", _INT),
    FieldMapping("series", "Series", "Series"),
    FieldMapping("series2", "Series2", "Series2"),
    FieldMapping("trim", "Trim", "Trim"),
    FieldMapping("trim2", "Trim2", "Trim2"),
    # classification
    FieldMapping("unit_type", "Vehicle Type", "VehicleType"),
    FieldMapping("vehicle_type", "Vehicle Type", "VehicleType"),
    FieldMapping("body_class", "Body Class", "BodyClass"),
    FieldMapping("body_type", "Cab Type", "BodyCabType"),
    FieldMapping("body_cab_type", "Cab Type", "BodyCabType"),
    FieldMapping("bed_type", "Bed Type", "BedType"),
    FieldMapping("bus_type", "Bus Type", "BusType"),
    FieldMapping("bus_length", "Bus Length (feet)", "BusLength"),
    FieldMapping("bus_floor_config_type", "Bus Floor Configuration Type", "BusFloorConfigType"),
    FieldMapping("motorcycle_chassis_type", "Motorcycle Chassis Type", "MotorcycleChassisType"),
    FieldMapping(
        "motorcycle_suspension_type", "Motorcycle Suspension Type", "MotorcycleSuspensionType"
    ),
    FieldMapping("trailer_body_type", "Trailer Body Type", "TrailerBodyType"),
    FieldMapping("trailer_length", "Trailer Length (feet)", "TrailerLength"),
    FieldMapping("trailer_type", "Trailer Type Connection", "TrailerType"),
    FieldMapping("custom_motorcycle_type", "Custom Motorcycle Type", "CustomMotorcycleType"),
    FieldMapping("non_land_use", "Non-Land Use", "NonLandUse"),
    FieldMapping("other_bus_info", "Other Bus Info", "OtherBusInfo"),
    FieldMapping("other_motorcycle_info", "Other Motorcycle Info", "OtherMotorcycleInfo"),
    FieldMapping("other_trailer_info", "Other Trailer Info", "OtherTrailerInfo"),
    # engine
    FieldMapping("fuel_type", "Fuel Type - Primary", "FuelTypePrimary"),
    FieldMapping("fuel_type_secondary", "Fuel Type - Secondary", "FuelTypeSecondary"),
    FieldMapping("engine_type", "Fuel Type - Primary", "FuelTypePrimary"),
    FieldMapping("engine_manufacturer", "Engine Manufacturer", "EngineManufacturer"),
    FieldMapping("engine_model", "Engine Model", "EngineModel"),
    FieldMapping("engine_cylinders", "Engine Number of Cylinders", "EngineCylinders", _INT),
    FieldMapping("engine_hp", "Engine Brake (hp) From", "EngineHP", _INT),
    FieldMapping("engine_hp_max", "Engine Brake (hp) To", "EngineHP_to", _INT),
    FieldMapping("engine_kw", "Engine Power (kW)", "EngineKW", _INT),
    FieldMapping("displacement_liters", "Displacement (L)", "DisplacementL", _FLOAT),
    FieldMapping("displacement_cc", "Displacement (CC)", "DisplacementCC", _FLOAT),
    FieldMapping("displacement_ci", "Displacement (CI)", "DisplacementCI", _FLOAT),
    FieldMapping("engine_configuration", "Engine Configuration", "EngineConfiguration"),
    FieldMapping("engine_cycles", "Engine Stroke Cycles", "EngineCycles"),
    FieldMapping("valve_train_design", "Valve Train Design", "ValveTrainDesign"),
    FieldMapping(
        "fuel_injection_type", "Fuel Delivery / Fuel Injection Type", "FuelInjectionType"
    ),
    FieldMapping("other_engine_info", "Other Engine Info", "OtherEngineInfo"),
    FieldMapping("turbo", "Turbo", "Turbo"),
    FieldMapping("cooling_type", "Cooling Type", "CoolingType"),
    FieldMapping("top_speed_mph", "Top Speed (MPH)", "TopSpeedMPH"),
    # drivetrain and brakes
    FieldMapping("transmission_type", "Transmission Style", "TransmissionStyle"),
    FieldMapping("transmission_style", "Transmission Style", "TransmissionStyle"),
    FieldMapping("transmission_speeds", "Transmission Speeds", "TransmissionSpeeds"),
    FieldMapping("drive_type", "Drive Type", "DriveType"),
    FieldMapping("brake_system_type", "Brake System Type", "BrakeSystemType"),
    FieldMapping("brake_system_desc", "Brake System Description", "BrakeSystemDesc"),
    FieldMapping(
        "combined_braking_system", "Combined Braking System (CBS)", "CombinedBrakingSystem"
    ),
    FieldMapping("dynamic_brake_support", "Dynamic Brake Support (DBS)", "DynamicBrakeSupport"),
    FieldMapping("axles", "Axles", "Axles", _INT),
    FieldMapping("axle_configuration", "Axle Configuration", "AxleConfiguration"),
    # dimensions and weights
    FieldMapping("doors", "Doors", "Doors", _INT),
    FieldMapping("windows", "Windows", "Windows", _INT),
    FieldMapping("seats", "Number of Seats", "Seats", _INT),
    FieldMapping("seat_rows", "Number of Seat Rows", "SeatRows", _INT),
    FieldMapping("curb_weight_lb", "Curb Weight (pounds)", "CurbWeightLB", _INT),
    FieldMapping("gvwr", "Gross Vehicle Weight Rating From", "GVWR"),
    FieldMapping("gvwr_to", "Gross Vehicle Weight Rating To", "GVWR_to"),
    FieldMapping("gcwr", "Gross Combination Weight Rating From", "GCWR"),
    FieldMapping("gcwr_to", "Gross Combination Weight Rating To", "GCWR_to"),
    FieldMapping("bed_length_in", "Bed Length (inches)", "BedLengthIN", _INT),
    FieldMapping("wheelbase_in", "Wheel Base (inches) From", "WheelBaseShort", _FLOAT),
    FieldMapping("wheelbase_short", "Wheel Base (inches) From", "WheelBaseShort", _FLOAT),
    FieldMapping("wheelbase_long", "Wheel Base (inches) To", "WheelBaseLong", _FLOAT),
    FieldMapping("wheelbase_type", "Wheel Base Type", "WheelBaseType"),
    FieldMapping("track_width", "Track Width (inches)", "TrackWidth", _FLOAT),
    FieldMapping("wheel_size_front", "Wheel Size Front (inches)", "WheelSizeFront", _INT),
    FieldMapping("wheel_size_rear", "Wheel Size Rear (inches)", "WheelSizeRear", _INT),
    # safety
    FieldMapping("abs", "Anti-lock Braking System (ABS)", "ABS"),
    FieldMapping("esc", "Electronic Stability Control (ESC)", "ESC"),
    FieldMapping("traction_control", "Traction Control", "TractionControl"),
    FieldMapping(
        "forward_collision_warning", "Forward Collision Warning (FCW)", "ForwardCollisionWarning"
    ),
    FieldMapping("blind_spot_mon", "Blind Spot Warning (BSW)", "BlindSpotMon"),
    FieldMapping(
        "blind_spot_intervention", "Blind Spot Intervention (BSI)", "BlindSpotIntervention"
    ),
    FieldMapping(
        "lane_departure_warning", "Lane Departure Warning (LDW)", "LaneDepartureWarning"
    ),
    FieldMapping("lane_keep_system", "Lane Keeping Assistance (LKA)", "LaneKeepSystem"),
    FieldMapping(
        "lane_centering_assistance", "Lane Centering Assistance", "LaneCenteringAssistance"
    ),
    FieldMapping("park_assist", "Parking Assist", "ParkAssist"),
    FieldMapping("rear_cross_traffic_alert", "Rear Cross Traffic Alert", "RearCrossTrafficAlert"),
    FieldMapping(
        "rear_automatic_emergency_braking",
        "Rear Automatic Emergency Braking",
        "RearAutomaticEmergencyBraking",
    ),
    FieldMapping("rear_visibility_system", "Backup Camera", "RearVisibilitySystem"),
    FieldMapping(
        "pedestrian_automatic_emergency_braking",
        "Pedestrian Automatic Emergency Braking (PAEB)",
        "PedestrianAutomaticEmergencyBraking",
    ),
    FieldMapping("seat_belts", "Seat Belt Type", "SeatBeltsAll"),
    FieldMapping("seat_belts_all", "Seat Belt Type", "SeatBeltsAll"),
    FieldMapping("pretensioner", "Pretensioner", "Pretensioner"),
    FieldMapping("air_bags_front", "Front Air Bag Locations", "AirBagLocFront"),
    FieldMapping("air_bags_knee", "Knee Air Bag Locations", "AirBagLocKnee"),
    FieldMapping("air_bags_side", "Side Air Bag Locations", "AirBagLocSide"),
    FieldMapping("air_bags_curtain", "Curtain Air Bag Locations", "AirBagLocCurtain"),
    FieldMapping(
        "air_bags_seat_cushion", "Seat Cushion Air Bag Locations", "AirBagLocSeatCushion"
    ),
    FieldMapping("airbag_loc_front", "Front Air Bag Locations", "AirBagLocFront"),
    FieldMapping("airbag_loc_knee", "Knee Air Bag Locations", "AirBagLocKnee"),
    FieldMapping("airbag_loc_side", "Side Air Bag Locations", "AirBagLocSide"),
    FieldMapping("airbag_loc_curtain", "Curtain Air Bag Locations", "AirBagLocCurtain"),
    FieldMapping(
        "airbag_loc_seat_cushion", "Seat Cushion Air Bag Locations", "AirBagLocSeatCushion"
    ),
    FieldMapping("active_safety_note", "Active Safety System Note", "ActiveSafetySysNote"),
    FieldMapping("active_safety_sys_note", "Active Safety System Note", "ActiveSafetySysNote"),
    FieldMapping(
        "other_restraint_system_info",
        "Other Restraint System Info",
        "OtherRestraintSystemInfo",
    ),
    FieldMapping("cib", "Crash Imminent Braking (CIB)", "CIB"),
    FieldMapping("edr", "Event Data Recorder (EDR)", "EDR"),
    # electrification
    FieldMapping("battery_type", "Battery Type", "BatteryType"),
    FieldMapping("battery_info", "Other Battery Info", "BatteryInfo"),
    FieldMapping("ev_drive_unit", "EV Drive Unit", "EVDriveUnit"),
    FieldMapping("electrification_level", "Electrification Level", "ElectrificationLevel"),
    FieldMapping("battery_kwh", "Battery Energy (kWh) From", "BatteryKWh", _FLOAT),
    FieldMapping("battery_kwh_to", "Battery Energy (kWh) To", "BatteryKWh_to", _FLOAT),
    FieldMapping("battery_v", "Battery Voltage (Volts) From", "BatteryV", _INT),
    FieldMapping("battery_v_to", "Battery Voltage (Volts) To", "BatteryV_to", _INT),
    FieldMapping("battery_a", "Battery Current (Amps) From", "BatteryA", _INT),
    FieldMapping("battery_a_to", "Battery Current (Amps) To", "BatteryA_to", _INT),
    FieldMapping("battery_cells", "Number of Battery Cells per Module", "BatteryCells", _INT),
    FieldMapping(
        "battery_modules", "Number of Battery Modules per Pack", "BatteryModules", _INT
    ),
    FieldMapping("battery_packs", "Number of Battery Packs per Vehicle", "BatteryPacks", _INT),
    FieldMapping("charger_level", "Charger Level", "ChargerLevel"),
    FieldMapping("charger_power_kw", "Charger Power (kW)", "ChargerPowerKW", _INT),
    # lighting and driver assistance
    FieldMapping(
        "adaptive_cruise_control", "Adaptive Cruise Control (ACC)", "AdaptiveCruiseControl"
    ),
    FieldMapping("adaptive_driving_beam", "Adaptive Driving Beam (ADB)", "AdaptiveDrivingBeam"),
    FieldMapping("adaptive_headlights", "Adaptive Headlights", "AdaptiveHeadlights"),
    FieldMapping("keyless_ignition", "Keyless Ignition", "KeylessIgnition"),
    FieldMapping("wheelie_mitigation", "Wheelie Mitigation", "WheelieMitigation"),
    FieldMapping(
        "automatic_pedestrian_alerting_sound",
        "Automatic Pedestrian Alerting Sound (for Hybrid and EV only)",
        "AutomaticPedestrianAlertingSound",
    ),
    FieldMapping(
        "auto_reverse_system",
        "Auto-Reverse System for Windows and Sunroofs",
        "AutoReverseSystem",
    ),
    FieldMapping("daytime_running_light", "Daytime Running Light (DRL)", "DaytimeRunningLight"),
    FieldMapping(
        "lower_beam_headlamp_light_source",
        "Headlamp Light Source",
        "LowerBeamHeadlampLightSource",
    ),
    FieldMapping(
        "semiautomatic_headlamp_beam_switching",
        "Semiautomatic Headlamp Beam Switching",
        "SemiautomaticHeadlampBeamSwitching",
    ),
    FieldMapping("sae_automation_level", "SAE Automation Level From", "SAEAutomationLevel"),
    FieldMapping("sae_automation_level_to", "SAE Automation Level To", "SAEAutomationLevel_to"),
    # manufacturing
    FieldMapping("plant_city", "Plant City", "PlantCity"),
    FieldMapping("plant_state", "Plant State", "PlantState"),
    FieldMapping("plant_country", "Plant Country", "PlantCountry"),
    FieldMapping("plant_company_name", "Plant Company Name", "PlantCompanyName"),
    FieldMapping("destination_market", "Destination Market", "DestinationMarket"),
    # NCSA coding
    FieldMapping("ncsa_body_type", "NCSA Body Type", "NCSABodyType"),
    FieldMapping("ncsa_make", "NCSA Make", "NCSAMake"),
    FieldMapping("ncsa_model", "NCSA Model", "NCSAModel"),
    FieldMapping("ncsa_mapping_exception", "NCSA Mapping Exception", "NCSAMappingException"),
    FieldMapping(
        "ncsa_map_exc_approved_by", "NCSA Map Exc Approved By", "NCSAMapExcApprovedBy"
    ),
    FieldMapping(
        "ncsa_map_exc_approved_on", "NCSA Map Exc Approved On", "NCSAMapExcApprovedOn"
    ),
    FieldMapping("ncsa_note", "NCSA Note", "NCSANote"),
    # misc
    FieldMapping("steering_location", "Steering Location", "SteeringLocation"),
    FieldMapping("base_price", "Base Price ($)", "BasePrice", _FLOAT),
    FieldMapping("vehicle_descriptor", "Vehicle Descriptor", "VehicleDescriptor"),
    FieldMapping("suggested_vin", "Suggested VIN", "SuggestedVIN"),
    FieldMapping("possible_values", "Possible Values", "PossibleValues"),
    FieldMapping("error_code", "Error Code", "ErrorCode"),
    FieldMapping("error_text", "Error Text", "ErrorText"),
    FieldMapping("note", "Note", "Note"),
)


def _parse_int(value: str | None) -> int | None:
    if value is None:
        return None
    try:
        return int(value.strip())
    except ValueError:
        return None


def _parse_float(value: str | None) -> float | None:
    if value is None:
        return None
    try:
        return float(value.strip())
    except ValueError:
        return None


def _convert(value: str | None, kind: FieldKind) -> object:
    if kind is FieldKind.INT:
        return _parse_int(value)
    if kind is FieldKind.FLOAT:
        return _parse_float(value)
    return value


def _clean(value: object) -> str | None:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _first_values(pairs: Iterable[DecodePair]) -> dict[str, str]:
    values: dict[str, str] = {}
    for name, value in pairs:
        cleaned = _clean(value)
        if cleaned is not None:
            values.setdefault(name, cleaned)
    return values


def normalize(
    pairs: Iterable[DecodePair],
    dialect: VinDecodeDialect,
    *,
    vin: str,
    now: datetime | None = None,
) -> Vehicle | None:
    """Build a vehicle from decode pairs; ``None`` when there are no pairs at all.

    The first non-blank value for a name wins. Numeric fields that do not parse
    become ``None`` rather than failing the decode.
    """

    pair_list = list(pairs)
    if not pair_list:
        return None

    values = _first_values(pair_list)
    fields: dict[str, object] = {
        mapping.field: _convert(values.get(mapping.source_name(dialect)), mapping.kind)
        for mapping in FIELD_MAPPINGS
    }
    stamp = now or datetime.now(UTC)
    return Vehicle(vin=vin, created_at=stamp, updated_at=stamp, **fields)  # pyright: ignore[reportArgumentType]


def pairs_from_decode_vin(response: DecodeVinResponse) -> list[DecodePair]:
    pairs: list[DecodePair] = []
    for row in response.results:
        pairs.append((row.variable, row.value))
        id_name = _ID_VARIABLES.get(row.variable)
        if id_name is not None and row.value is not None:
            pairs.append((id_name, row.value_id))
    return pairs


def pairs_from_decode_vin_values(response: DecodeVinValuesResponse) -> list[DecodePair]:
    return [
        (key, _clean(value)) for result in response.results for key, value in result.items()
    ]
