# app/machines/models.py
from app.extensions import db

# Fallback for rows whose machine cell is blank
UNKNOWN_MACHINE = "Unknown Machine"

# Spreadsheet columns A..K, in order. Keep identical to the Machine columns below.
MACHINE_COLUMNS = [
    "customs",
    "reference",
    "machine",
    "pn",
    "etb",
    "eta_port",
    "eta_destination",
    "ship",
    "division",
    "status",
    "bl",
]


class Machine(db.Model):
    """One tracked shipment/machine, i.e. one data row of the uploaded sheet."""

    __tablename__ = "machines"
    __table_args__ = {"sqlite_autoincrement": True}

    id = db.Column(db.Integer, primary_key=True, autoincrement=True)
    customs = db.Column(db.Text)
    reference = db.Column(db.Text)
    machine = db.Column(db.Text, nullable=False)
    pn = db.Column(db.Text)                       # part number
    etb = db.Column(db.String(10))                # YYYY-MM-DD
    eta_port = db.Column(db.String(10))
    eta_destination = db.Column(db.String(10))
    ship = db.Column(db.Text)
    division = db.Column(db.Text)
    status = db.Column(db.Text)
    bl = db.Column(db.Text)                       # bill of lading

    def to_dict(self):
        out = {"id": self.id}
        for col in MACHINE_COLUMNS:
            out[col] = getattr(self, col)
        return out
