# boresight/config/config_model.py
"""
Application configuration model loaded from ``config.json``.

Only operator preferences live here. Calibration sessions are never
written to the configuration file.
"""
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from boresight.measurement.result_writer import OutputFormat
from boresight.measurement.statistics_aggregator import AngleMode


class AppConfig(BaseModel):
    """
    High level application configuration.

    Defines the tunable parameters exposed in the GUI: result precision,
    angle output mode, marker appearance, prefilled calibration values
    and the default export format.  A ``config_file_path`` attribute is
    stored alongside the parsed data so that the UI knows where the
    configuration originated.
    """
    model_config = ConfigDict(
        # Enumerations are serialised as their values ("csv", "two_axis")
        use_enum_values=True,
        # Older configs with unknown keys still load
        extra="ignore",
        validate_default=True,
    )

    # Number of decimal places for displayed and exported results
    decimal_places: int = Field(
        default=4,
        ge=0,
        le=10,
        description="Decimal places used when formatting milliradian values"
    )
    angle_mode: AngleMode = Field(
        default=AngleMode.TWO_AXIS,
        description="two_axis (traverse + elevation) or traverse_only"
    )

    # Marker appearance
    marker_radius_px: float = Field(
        default=5.0,
        gt=0.0,
        description="Radius of the circle drawn on each clicked point, in image pixels"
    )
    reference_marker_color: str = Field(
        default="red",
        description="Qt colour name for calibration point markers"
    )
    marked_marker_color: str = Field(
        default="lime",
        description="Qt colour name for marked point markers"
    )

    # Values prefilled in the distance/range inputs
    default_real_distance: Optional[float] = Field(
        default=None,
        gt=0.0,
        description="Known real distance between the two calibration points"
    )
    default_range: Optional[float] = Field(
        default=None,
        gt=0.0,
        description="Range to the photographed plane, same unit as the distance"
    )

    default_output_format: OutputFormat = Field(
        default=OutputFormat.CSV,
        description="Default file format for exported results (txt, md or csv)"
    )

    # Path to the JSON file from which this configuration was loaded.  Set
    # by ``ConfigManager`` and never written back to the file.
    config_file_path: Optional[str] = Field(
        default=None,
        exclude=True,
        description="Internal: path of the loaded configuration file"
    )

    @field_validator('reference_marker_color', 'marked_marker_color')
    @classmethod
    def _validate_color(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("marker colour must not be empty")
        return v

    @classmethod
    def default(cls) -> 'AppConfig':
        """Returns a default AppConfig instance."""
        return cls()
