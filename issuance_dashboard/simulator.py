"""
Simulated issuance data for the Material Issuance dashboard.

Produces records shaped like a store's issuance export, including the mess
real exports have: alternate header names, day-first dates in several
spellings, noisy material descriptions, blank cells and credit (return)
rows. All values are synthetic.
"""

import numpy as np
import pandas as pd

# ---------------------------------------------------------------------------
# Reference data
# ---------------------------------------------------------------------------
_DEPARTMENTS = [
    "Maintenance", "Production", "Electrical", "Workshop", "Safety",
    "Logistics", "Laboratory", "Civil Works", "Utilities", "Stores",
    "Instrumentation", "Administration",
]

_STOREKEEPERS = ["A. Rahman", "S. Khalid", "M. Yusuf", "F. Nasser"]

# (item code, description, unit price)
_MATERIALS = [
    ("HW-1001", "HW; 10MM GALVANIZED BOLT (GRADE 8)", 1.75),
    ("HW-1002", "HW; 12MM HEX NUT 100 PCS", 18.50),
    ("EL-2001", "ELEC; CABLE TIE 300MM 100 PCS - BLACK", 9.25),
    ("EL-2002", "ELEC; LED TUBE 18W 1200MM", 14.00),
    ("CH-3001", "CHEM; DEGREASER 5 LTR", 42.00),
    ("CH-3002", "CHEM; HYDRAULIC OIL ISO 68 20 LTR", 165.00),
    ("PP-4001", "PPE; NITRILE GLOVES SIZE L (BOX OF 100)", 27.50),
    ("PP-4002", "PPE; SAFETY GOGGLES CLEAR", 11.75),
    ("PP-4003", "PPE; COVERALL COTTON SIZE XL", 58.00),
    ("CL-5001", "CLEANING; COTTON RAGS BALE OF 25 KG", 95.00),
    ("CL-5002", "CLEANING; TISSUE ROLL 2 PLY 48 ROLL", 36.00),
    ("ME-6001", "MECH; BEARING 6205 2RS PART NO. SKF6205", 23.40),
    ("ME-6002", "MECH; V-BELT B52", 19.90),
    ("ST-7001", "STAT; A4 PAPER 80 GSM 5 BOX", 120.00),
    ("WD-8001", "WELDING ROD E6013 3.2MM 5 KG", 48.00),
]

_DATE_STYLES = ["%d/%m/%Y", "%d-%m-%y", "%d-%m-%Y", "%Y-%m-%d"]


def generate_issuance_records(
    n_records: int = 500,
    start_date: str = "2026-01-04",
    days: int = 42,
    seed: int = 42,
) -> list[dict]:
    """Generate simulated issuance records.

    Parameters
    ----------
    n_records : Number of records.
    start_date : First issuance day.
    days : Length of the period in days.
    seed : RNG seed; the same seed gives the same records.

    Returns
    -------
    List of dicts keyed by header name. Headers alternate between the
    export's aliases ("Issued Value"/"Value", "Issue Date"/"Posting Date",
    ...) and about 2% of rows carry a credit (negative value and quantity).
    """
    rng = np.random.default_rng(seed)
    dates = pd.date_range(start_date, periods=days, freq="D")
    # busier departments draw more issues
    dept_weights = rng.dirichlet(np.ones(len(_DEPARTMENTS)) * 0.8)

    records = []
    for i in range(n_records):
        code, description, price = _MATERIALS[rng.integers(len(_MATERIALS))]
        qty = int(rng.integers(1, 40))
        if rng.random() < 0.02:
            qty = -qty
        value = round(qty * price * rng.uniform(0.95, 1.05), 2)
        day = dates[rng.integers(len(dates))]
        style = _DATE_STYLES[rng.integers(len(_DATE_STYLES))]

        record = {
            "DEPARTMENT" if i % 2 else "Department":
                _DEPARTMENTS[rng.choice(len(_DEPARTMENTS), p=dept_weights)],
            "Issued Value" if i % 3 else "Value": value,
            "Issued Qty" if i % 3 else "Quantity": qty,
            "Issue Date" if i % 4 else "Posting Date": day.strftime(style),
            "Description": description,
            "Item Code": code if rng.random() > 0.05 else None,
            "Issued By": _STOREKEEPERS[rng.integers(len(_STOREKEEPERS))],
        }
        # some exports carry their own fiscal week
        if i % 10 == 0:
            record["WEEK"] = f"{day.year}-W{day.isocalendar()[1]}"
        records.append(record)

    return records


def generate_issuance_frame(**kwargs) -> pd.DataFrame:
    """generate_issuance_records() as a DataFrame, e.g. for CSV export."""
    return pd.DataFrame(generate_issuance_records(**kwargs))
