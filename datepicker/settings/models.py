"""
Picker configuration model using Pydantic for validation and type safety.

``PickerConfig`` is built once with named fields and explicit defaults, then
never mutated. Every option has a camelCase alias so a host can pass the
option set it already uses (``minDate``, ``selectionType``, ...), and the
constraint options may be given at the top level instead of nested under
``date_constraints``.
"""

import logging
from datetime import date
from typing import Any, Optional

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    ValidationInfo,
    field_validator,
    model_validator,
)

from ..calendar_math import MAX_YEAR, MIN_YEAR, is_year_supported
from ..constraints import DateConstraints, is_period_allowed
from ..exceptions import ConfigError
from ..view_types import Granularity, Weekday

logger = logging.getLogger(__name__)

# Option names and aliases that belong to DateConstraints, mapped to field names.
_CONSTRAINT_KEYS: dict[str, str] = {}
for _name, _field in DateConstraints.model_fields.items():
    _CONSTRAINT_KEYS[_name] = _name
    if _field.alias:
        _CONSTRAINT_KEYS[_field.alias] = _name


def _fold_constraints(nested: Any, flat: dict[str, Any]) -> Any:
    """Combine a ``date_constraints`` value with flat constraint options.

    Returns a mapping keyed by DateConstraints field names, or ``nested``
    unchanged when it is neither a mapping nor a DateConstraints.

    Raises:
        ConfigError: If a rule is given both in ``nested`` and in ``flat``
    """
    if nested is None:
        return dict(flat)
    if isinstance(nested, DateConstraints):
        return {**nested.model_dump(), **flat}
    if not isinstance(nested, dict):
        return nested
    nested = {_CONSTRAINT_KEYS.get(key, key): value for key, value in nested.items()}
    overlap = set(flat) & set(nested)
    if overlap:
        raise ConfigError(
            "Constraint options given both at top level and in date_constraints",
            field_name="date_constraints",
            field_value=sorted(overlap),
        )
    return {**nested, **flat}


def normalize_to_period(value: date, granularity: Granularity) -> date:
    """Return the canonical first day of the period containing ``value``."""
    if granularity == Granularity.DAY:
        return value
    if granularity == Granularity.MONTH:
        return value.replace(day=1)
    return date(value.year, 1, 1)


class PickerConfig(BaseModel):
    """Complete configuration of one picker instance.

    Attributes:
        date_constraints: Rules deciding which dates may be selected
        selection_type: Granularity at which a click selects instead of drilling down
        starting_view: Granularity shown first; defaults to ``selection_type``
        initial_selected_date: Preselected value, normalized to its period start
        starting_date: Date whose period is displayed first; defaults to the
            initial selection, then today
        initially_opened: Whether the picker dialog starts open
        month_title_format: strftime format of the Day view title
        week_start: Weekday shown in the first grid column
        fixed_weeks: Whether day grids always span six weeks

    Example:
        >>> config = PickerConfig(
        ...     selection_type="months",
        ...     min_date=date(2020, 12, 1),
        ... )
        >>> config.date_constraints.min_date
        datetime.date(2020, 12, 1)
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="forbid")

    date_constraints: DateConstraints = Field(
        default_factory=DateConstraints, alias="dateConstraints"
    )
    selection_type: Granularity = Field(default=Granularity.DAY, alias="selectionType")
    starting_view: Optional[Granularity] = Field(default=None, alias="startingView")
    initial_selected_date: Optional[date] = Field(default=None, alias="initialSelectedDate")
    starting_date: Optional[date] = Field(default=None, alias="startingDate")
    initially_opened: bool = Field(default=False, alias="initiallyOpened")
    month_title_format: str = Field(default="%b %Y", min_length=1, alias="monthTitleFormat")
    week_start: Weekday = Field(default=Weekday.MONDAY, alias="weekStart")
    fixed_weeks: bool = Field(default=True, alias="fixedWeeks")

    @model_validator(mode="before")
    @classmethod
    def fold_constraint_keys(cls, values: Any) -> Any:
        """Move top-level constraint options into ``date_constraints``.

        Args:
            values: Input values dictionary

        Returns:
            Values with constraint options nested under date_constraints

        Raises:
            ConfigError: If a constraint option is given both ways
        """
        if not isinstance(values, dict):
            return values

        flat = {}
        remaining = {}
        for key, value in values.items():
            if key in _CONSTRAINT_KEYS:
                flat[_CONSTRAINT_KEYS[key]] = value
            else:
                remaining[key] = value
        if not flat:
            return values

        nested_key = "dateConstraints" if "dateConstraints" in remaining else "date_constraints"
        remaining[nested_key] = _fold_constraints(remaining.get(nested_key), flat)
        return remaining

    @field_validator("selection_type", "starting_view", mode="before")
    @classmethod
    def parse_granularity(cls, v: Any, info: ValidationInfo) -> Any:
        if v is None:
            return v
        try:
            return Granularity.parse(v)
        except ValueError as e:
            raise ConfigError(
                f"Invalid granularity: {v!r}",
                field_name=info.field_name,
                field_value=v,
                validation_errors=[str(e)],
            ) from e

    @field_validator("initial_selected_date")
    @classmethod
    def normalize_initial_selection(cls, v: Optional[date], info: ValidationInfo) -> Optional[date]:
        """Store a year or month selection as the first day of its period."""
        if v is None:
            return v
        selection_type = info.data.get("selection_type", Granularity.DAY)
        return normalize_to_period(v, selection_type)

    @field_validator("week_start", mode="before")
    @classmethod
    def parse_week_start(cls, v: Any) -> Weekday:
        try:
            return Weekday.parse(v)
        except ValueError as e:
            raise ConfigError(
                f"Invalid week start: {v!r}",
                field_name="week_start",
                field_value=v,
                validation_errors=[str(e)],
            ) from e

    @model_validator(mode="after")
    def validate_picker(self) -> "PickerConfig":
        """Check the options against each other.

        Raises:
            ConfigError: If the starting view is finer than the selection type,
                the starting period is outside the supported years, or the
                initial selection is forbidden by the constraints
        """
        if self.initial_view > self.selection_type:
            raise ConfigError(
                "starting_view can have at most selection_type scale",
                field_name="starting_view",
                field_value=self.initial_view.name,
                details={"selection_type": self.selection_type.name},
            )

        for name in ("starting_date", "initial_selected_date"):
            value = getattr(self, name)
            if value is not None and not is_year_supported(value.year):
                raise ConfigError(
                    f"{name} must be within years {MIN_YEAR}-{MAX_YEAR}",
                    field_name=name,
                    field_value=value,
                )

        if self.initial_selected_date is not None and not is_period_allowed(
            self.initial_selected_date, self.selection_type, self.date_constraints
        ):
            raise ConfigError(
                f"The initial_selected_date {self.initial_selected_date} is forbidden "
                "by the date_constraints.",
                field_name="initial_selected_date",
                field_value=self.initial_selected_date,
            )
        return self

    @property
    def initial_view(self) -> Granularity:
        """Granularity shown at start: ``starting_view`` or the selection type."""
        return self.starting_view if self.starting_view is not None else self.selection_type

    def anchor_date(self, today: Optional[date] = None) -> date:
        """Return the date whose period is displayed when the picker starts.

        Without a starting date or an initial selection, today is shown,
        moved onto ``min_date`` or ``max_date`` when it lies outside them.
        """
        if self.starting_date is not None:
            return self.starting_date
        if self.initial_selected_date is not None:
            return self.initial_selected_date

        anchor = today or date.today()
        min_date = self.date_constraints.min_date
        max_date = self.date_constraints.max_date
        if min_date is not None and anchor < min_date and is_year_supported(min_date.year):
            return min_date
        if max_date is not None and anchor > max_date and is_year_supported(max_date.year):
            return max_date
        return anchor

    @classmethod
    def from_mapping(cls, data: Optional[dict[str, Any]] = None, **options: Any) -> "PickerConfig":
        """Build a config from a mapping and/or keyword options.

        Both sources may use field names or camelCase aliases; keyword options
        replace the mapping's value for the same option whatever its spelling.
        Constraint rules are merged rule by rule, so overriding ``max_date``
        keeps a ``min_date`` from the mapping. Pydantic validation errors are
        re-raised as ``ConfigError`` so callers deal with a single
        construction failure type.

        Raises:
            ConfigError: If any option is invalid
        """
        base, base_constraints = _canonical_options(data or {})
        overrides, override_constraints = _canonical_options(options)

        merged = {**base, **overrides}
        if isinstance(base_constraints, dict) and isinstance(override_constraints, dict):
            merged["date_constraints"] = {**base_constraints, **override_constraints}
        elif override_constraints is not None:
            merged["date_constraints"] = override_constraints
        elif base_constraints is not None:
            merged["date_constraints"] = base_constraints

        try:
            return cls.model_validate(merged)
        except ValidationError as e:
            errors = [
                f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}"
                for err in e.errors()
            ]
            raise ConfigError(
                "Invalid picker configuration",
                validation_errors=errors,
            ) from e


def _canonical_options(values: dict[str, Any]) -> tuple[dict[str, Any], Any]:
    """Key ``values`` by PickerConfig field name and fold its constraint rules.

    Returns:
        The non-constraint options, and the combined constraint rules
        (None when no rule is given)

    Raises:
        ConfigError: If an option is given under both of its spellings
    """
    field_names = {}
    for name, field in PickerConfig.model_fields.items():
        field_names[name] = name
        if field.alias:
            field_names[field.alias] = name

    options: dict[str, Any] = {}
    flat: dict[str, Any] = {}
    for key, value in values.items():
        if key in _CONSTRAINT_KEYS:
            target, name = flat, _CONSTRAINT_KEYS[key]
        else:
            target, name = options, field_names.get(key, key)
        if name in target:
            raise ConfigError(
                f"Option {name} given more than once",
                field_name=name,
                field_value=key,
            )
        target[name] = value

    nested = options.pop("date_constraints", None)
    if nested is None and not flat:
        return options, None
    return options, _fold_constraints(nested, flat)
