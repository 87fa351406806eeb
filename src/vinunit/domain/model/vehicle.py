"""Decoded vehicle facts shared by every unit carrying the same VIN."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from datetime import datetime


@dataclass(frozen=True, slots=True, kw_only=True)
class Vehicle:
    """One record per VIN, built from a decode response and catalog lookups.

    Everything except ``vin`` is optional: decode payloads routinely omit values
    and catalog resolution is best-effort.
    """

    vin: str

    year: int | None = None
    make: str | None = None
    make_id: int | None = None
    manufacturer: str | None = None
    manufacturer_id: int | None = None
    model: str | None = None
    model_id: int | None = None
    series: str | None = None
    series2: str | None = None
    trim: str | None = None
    trim2: str | None = None

    # reference catalog ids
    base_vehicle_id: int | None = None
    engine_base_id: int | None = None

    # classification
    unit_type: str | None = None
    vehicle_type: str | None = None
    body_class: str | None = None
    body_type: str | None = None
    body_cab_type: str | None = None
    bed_type: str | None = None
    bus_type: str | None = None
    bus_length: str | None = None
    bus_floor_config_type: str | None = None
    motorcycle_chassis_type: str | None = None
    motorcycle_suspension_type: str | None = None
    trailer_body_type: str | None = None
    trailer_length: str | None = None
    trailer_type: str | None = None
    custom_motorcycle_type: str | None = None
    non_land_use: str | None = None
    other_bus_info: str | None = None
    other_motorcycle_info: str | None = None
    other_trailer_info: str | None = None

    # engine
    fuel_type: str | None = None
    fuel_type_secondary: str | None = None
    engine_type: str | None = None
    engine_manufacturer: str | None = None
    engine_model: str | None = None
    engine_cylinders: int | None = None
    engine_hp: int | None = None
    engine_hp_max: int | None = None
    engine_kw: int | None = None
    displacement_liters: float | None = None
    displacement_cc: float | None = None
    displacement_ci: float | None = None
    engine_configuration: str | None = None
    engine_cycles: str | None = None
    valve_train_design: str | None = None
    fuel_injection_type: str | None = None
    other_engine_info: str | None = None
    turbo: str | None = None
    cooling_type: str | None = None
    top_speed_mph: str | None = None

    # drivetrain and brakes
    transmission_type: str | None = None
    transmission_style: str | None = None
    transmission_speeds: str | None = None
    drive_type: str | None = None
    brake_system_type: str | None = None
    brake_system_desc: str | None = None
    combined_braking_system: str | None = None
    dynamic_brake_support: str | None = None
    axles: int | None = None
    axle_configuration: str | None = None

    # dimensions and weights
    doors: int | None = None
    windows: int | None = None
    seats: int | None = None
    seat_rows: int | None = None
    curb_weight_lb: int | None = None
    gvwr: str | None = None
    gvwr_to: str | None = None
    gcwr: str | None = None
    gcwr_to: str | None = None
    bed_length_in: int | None = None
    wheelbase_in: float | None = None
    wheelbase_short: float | None = None
    wheelbase_long: float | None = None
    wheelbase_type: str | None = None
    track_width: float | None = None
    wheel_size_front: int | None = None
    wheel_size_rear: int | None = None

    # safety
    abs: str | None = None
    esc: str | None = None
    traction_control: str | None = None
    forward_collision_warning: str | None = None
    blind_spot_mon: str | None = None
    blind_spot_intervention: str | None = None
    lane_departure_warning: str | None = None
    lane_keep_system: str | None = None
    lane_centering_assistance: str | None = None
    park_assist: str | None = None
    rear_cross_traffic_alert: str | None = None
    rear_automatic_emergency_braking: str | None = None
    rear_visibility_system: str | None = None
    pedestrian_automatic_emergency_braking: str | None = None
    seat_belts: str | None = None
    seat_belts_all: str | None = None
    pretensioner: str | None = None
    air_bags_front: str | None = None
    air_bags_knee: str | None = None
    air_bags_side: str | None = None
    air_bags_curtain: str | None = None
    air_bags_seat_cushion: str | None = None
    airbag_loc_front: str | None = None
    airbag_loc_knee: str | None = None
    airbag_loc_side: str | None = None
    airbag_loc_curtain: str | None = None
    airbag_loc_seat_cushion: str | None = None
    active_safety_note: str | None = None
    active_safety_sys_note: str | None = None
    other_restraint_system_info: str | None = None
    cib: str | None = None
    edr: str | None = None

    # electrification
    battery_type: str | None = None
    battery_info: str | None = None
    ev_drive_unit: str | None = None
    electrification_level: str | None = None
    battery_kwh: float | None = None
    battery_kwh_to: float | None = None
    battery_v: int | None = None
    battery_v_to: int | None = None
    battery_a: int | None = None
    battery_a_to: int | None = None
    battery_cells: int | None = None
    battery_modules: int | None = None
    battery_packs: int | None = None
    charger_level: str | None = None
    charger_power_kw: int | None = None

    # lighting and driver assistance
    adaptive_cruise_control: str | None = None
    adaptive_driving_beam: str | None = None
    adaptive_headlights: str | None = None
    keyless_ignition: str | None = None
    wheelie_mitigation: str | None = None
    automatic_pedestrian_alerting_sound: str | None = None
    auto_reverse_system: str | None = None
    daytime_running_light: str | None = None
    lower_beam_headlamp_light_source: str | None = None
    semiautomatic_headlamp_beam_switching: str | None = None
    sae_automation_level: str | None = None
    sae_automation_level_to: str | None = None

    # manufacturing
    plant_city: str | None = None
    plant_state: str | None = None
    plant_country: str | None = None
    plant_company_name: str | None = None
    destination_market: str | None = None

    # NCSA coding
    ncsa_body_type: str | None = None
    ncsa_make: str | None = None
    ncsa_model: str | None = None
    ncsa_mapping_exception: str | None = None
    ncsa_map_exc_approved_by: str | None = None
    ncsa_map_exc_approved_on: str | None = None
    ncsa_note: str | None = None

    # misc
    steering_location: str | None = None
    base_price: float | None = None
    vehicle_descriptor: str | None = None
    suggested_vin: str | None = None
    possible_values: str | None = None
    error_code: str | None = None
    error_text: str | None = None
    note: str | None = None

    created_at: datetime | None = None
    updated_at: datetime | None = None

    def with_catalog_ids(
        self,
        *,
        base_vehicle_id: int | None,
        engine_base_id: int | None,
    ) -> Vehicle:
        return replace(self, base_vehicle_id=base_vehicle_id, engine_base_id=engine_base_id)
