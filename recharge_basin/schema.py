from __future__ import annotations
from typing import Dict, Any

# Parameter schema: JSON key, python field, units, type, bounds, default, description.
# A None default marks a required input.
SCHEMA: Dict[str, Dict[str, Any]] = {
    "acres":            {"field": "acres",              "unit": "acres",          "type": "float", "min": None, "max": None, "default": None,   "desc": "Parcel / basin footprint area"},
    "soilType":         {"field": "soil_type",          "unit": "symbol",         "type": "str",                                     "default": None,   "desc": "Soil map-unit symbol, e.g. SiCl2"},
    "pipelineLength":   {"field": "pipeline_length",    "unit": "ft",             "type": "float", "min": 0.0,  "max": None, "default": 0.0,    "desc": "Delivery pipeline length"},
    "landCostPerAcre":  {"field": "land_cost_per_acre", "unit": "USD/acre",       "type": "float", "min": 0.0,  "max": None, "default": 6000.0, "desc": "Land purchase price"},
    "waterCost":        {"field": "water_cost",         "unit": "USD/ac-ft",      "type": "float", "min": 0.0,  "max": None, "default": 35.0,   "desc": "Cost of source water"},
    "waterValue":       {"field": "water_value",        "unit": "USD/ac-ft",      "type": "float", "min": 0.0,  "max": None, "default": 200.0,  "desc": "Value of recharged water"},
    "discountRate":     {"field": "discount_rate",      "unit": "fraction/yr",    "type": "float", "min": 0.0,  "max": None, "default": 0.05,   "desc": "Loan interest and discount rate"},
    "loanYears":        {"field": "loan_years",         "unit": "years",          "type": "int",   "min": 1,    "max": None, "default": 10,     "desc": "Loan term and evaluation horizon"},
    "wetYearFrequency": {"field": "wet_year_frequency", "unit": "fraction",       "type": "float", "min": 0.0,  "max": 1.0,  "default": 0.3,    "desc": "Share of years the basin operates"},
    "wetYearDuration":  {"field": "wet_year_duration",  "unit": "months",         "type": "int",   "min": 0,    "max": 12,   "default": 4,      "desc": "Operating months in a wet year"},
    "evaporationLoss":  {"field": "evaporation_loss",   "unit": "fraction",       "type": "float", "min": 0.0,  "max": 1.0,  "default": 0.3,    "desc": "Share of gross recharge lost to evaporation", "max_exclusive": True},
}

REQUIRED = ("acres", "soilType")

# Keys a scenario file may carry besides SCHEMA keys.
AUXILIARY_KEYS = ("polygon", "geometry", "soils", "name", "description", "cost_rates", "design")

# Overrides for costs.CostRates / basin.BasinDesign
COST_RATES_SCHEMA: Dict[str, Dict[str, Any]] = {
    "earthwork_per_cuyd": {"unit": "USD/cu yd", "type": "float", "min": 0.0, "max": None},
    "pipeline_per_ft":    {"unit": "USD/ft",    "type": "float", "min": 0.0, "max": None},
    "inlet_fixed":        {"unit": "USD",       "type": "float", "min": 0.0, "max": None},
    "contingency_pct":    {"unit": "fraction",  "type": "float", "min": 0.0, "max": 1.0},
}

DESIGN_SCHEMA: Dict[str, Dict[str, Any]] = {
    "top_width_ft":   {"unit": "ft",    "type": "float", "min": 0.0, "max": None},
    "inside_slope":   {"unit": "H:1V",  "type": "float", "min": 0.0, "max": None},
    "outside_slope":  {"unit": "H:1V",  "type": "float", "min": 0.0, "max": None},
    "freeboard_ft":   {"unit": "ft",    "type": "float", "min": 0.0, "max": None},
    "water_depth_ft": {"unit": "ft",    "type": "float", "min": 0.0, "max": None},
}

# python field name -> JSON key
FIELD_TO_KEY: Dict[str, str] = {spec["field"]: key for key, spec in SCHEMA.items()}
