import importlib
import inspect

from recharge_basin.engine import calculate


def _param_names(fn):
    return [p.name for p in inspect.signature(fn).parameters.values()]


REQUEST = {"acres": 10, "soilType": "l", "pipelineLength": 1000}


def test_response_sections_and_keys_are_stable():
    """Display clients read these keys; renaming any of them is a breaking change."""
    res = calculate(REQUEST)["results"]
    for k in ("acres", "soilType", "infiltrationRate", "dimensions", "costs", "recharge", "economics"):
        assert k in res
    assert {"sideLength", "perimeter", "wettedArea"} <= set(res["dimensions"])
    assert {"landCost", "earthworkCost", "pipelineCost", "totalCost", "annualCapitalPayment"} <= set(res["costs"])
    assert {"grossRecharge", "netRecharge", "daysPerYear"} <= set(res["recharge"])
    assert {"annualBenefit", "netBenefit", "totalAnnualCostPerAcFt", "npv", "bcRatio", "roi"} <= set(res["economics"])


def test_display_fields_are_fixed_point_strings():
    res = calculate(REQUEST)["results"]
    assert "." not in res["dimensions"]["sideLength"]
    assert len(res["dimensions"]["wettedArea"].split(".")[1]) == 2
    for k in ("annualBenefit", "netBenefit", "npv", "bcRatio", "roi"):
        assert len(res["economics"][k].split(".")[1]) == 2
    assert isinstance(res["costs"]["totalCost"], float)


def test_finance_public_api_is_stable():
    """Lock down that NPV/IRR live in finance.discount with a stable entrypoint."""
    m = importlib.import_module("recharge_basin.finance.discount")
    assert _param_names(m.irr)[0] == "cashflows"
    assert _param_names(m.npv)[:2] == ["rate", "cashflows"]
    assert _param_names(m.pv_factor) == ["rate", "years"]
    a = importlib.import_module("recharge_basin.finance.amortization")
    assert _param_names(a.annual_payment) == ["principal", "annual_rate", "years"]


def test_package_exports():
    pkg = importlib.import_module("recharge_basin")
    for name in ("evaluate", "calculate", "InputParameters", "FeasibilityResult", "ValidationError", "DomainError", "SingularityError"):
        assert hasattr(pkg, name), name
