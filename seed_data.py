# seed_data.py
# Replaces the machines table with a few demo rows (same path as an admin upload).

from app import create_app
from app.extensions import db
from app.machines.ingest import extract_rows, replace_machines

HEADER = ["Customs", "Reference", "Machine", "PN", "ETB", "ETA Port", "ETA Destination",
          "Ship", "Division", "Status", "BL"]

DEMO_ROWS = [
    HEADER,
    ["DIN-1001", "PO-4501", "CT2", 3222334455.0, "2025-03-02", "Por confirmar", 45750,
     "MSC Aurora", "Underground", "In transit", "MEDU1234567"],
    ["DIN-1002", "PO-4502", "ST14", "8992001122", 45720, 45727, "2025-03-20",
     "Maersk Lima", "Underground", "At port", "MAEU7654321"],
    ["", "PO-4503", None, None, "TBC", None, None,
     None, "Surface", "Ordered", None],
    [None] * len(HEADER),
]

app = create_app()

with app.app_context():
    rows = extract_rows(DEMO_ROWS)
    inserted = replace_machines(db.engine, rows)
    print(f"Seeded {inserted} machines.")
