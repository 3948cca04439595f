# apartment_database.py

from dataclasses import dataclass, replace
from extensions import db
from utils.occupancy import normalize_resident, same_flag


# --- Apartment Model ---
class Apartment(db.Model):
    __tablename__ = 'apartments'

    id = db.Column(db.Text, primary_key=True)  # Chosen by the caller, never generated
    owner = db.Column(db.Text, nullable=False, default='')
    resident = db.Column(db.Text, nullable=False)
    same_flag = db.Column(db.Boolean, nullable=False, default=False)  # Derived from owner/resident

    def to_record(self) -> 'ApartmentRecord':
        return ApartmentRecord(
            id=self.id,
            owner=self.owner,
            resident=self.resident,
            same_flag=bool(self.same_flag)
        )

    def __repr__(self):
        return f'<Apartment {self.id!r}>'


@dataclass(frozen=True)
class ApartmentRecord:
    """
    Detached value describing one apartment.

    This is what crosses layer boundaries: the CLI builds one for the record
    being edited, repositories return them instead of live ORM objects.
    """
    id: str
    owner: str = ''
    resident: str = ''
    same_flag: bool = False

    def normalized(self) -> 'ApartmentRecord':
        """Return a copy with the resident normalized and the flag recomputed."""
        resident = normalize_resident(self.resident)
        return replace(
            self,
            owner=self.owner or '',
            resident=resident,
            same_flag=same_flag(self.owner, resident)
        )

    def label(self) -> str:
        """Single-line text used by list displays."""
        return f"ID: {self.id} | Owner: {self.owner} | Resident: {self.resident}"
