"""Member domain entity for the pharmacy service.

This module contains the core Member domain entity representing
a pharmacy plan member following Domain-Driven Design principles.
"""

from dataclasses import asdict, dataclass
from datetime import date
from typing import Any, Dict, Optional


@dataclass
class Member:
    """Domain entity representing a pharmacy plan member.

    Attributes:
        id (Optional[int]): Store-assigned identifier. None for new members.
        member_number (str): Business-unique member number.
        first_name (str): Member first name.
        last_name (str): Member last name.
        dob (date): Date of birth.
        gender (str): Gender (Male, Female or Other).
        address (str): Postal address.
        phone (str): Contact phone number.
        email (str): Contact email address.
    """

    id: Optional[int]
    member_number: str
    first_name: str
    last_name: str
    dob: date
    gender: str
    address: str = ""
    phone: str = ""
    email: str = ""

    def __post_init__(self):
        """Validate member after initialization.

        Raises:
            ValueError: If member number or names are empty.
        """
        if not self.member_number or not self.member_number.strip():
            raise ValueError("Member number cannot be empty")
        if not self.first_name.strip() or not self.last_name.strip():
            raise ValueError("Member first and last name cannot be empty")

    def is_new(self) -> bool:
        """Check if this member has not been persisted yet."""
        return self.id is None

    def update_details(
        self,
        first_name: str,
        last_name: str,
        dob: date,
        gender: str,
        address: str,
        phone: str,
        email: str,
    ) -> None:
        """Replace the mutable member details.

        The member number is immutable once assigned.

        Raises:
            ValueError: If first or last name are empty.
        """
        if not first_name.strip() or not last_name.strip():
            raise ValueError("Member first and last name cannot be empty")

        self.first_name = first_name
        self.last_name = last_name
        self.dob = dob
        self.gender = gender
        self.address = address
        self.phone = phone
        self.email = email

    def to_dict(self) -> Dict[str, Any]:
        """Serialize the member into a JSON-compatible dictionary."""
        data = asdict(self)
        data["dob"] = self.dob.isoformat()
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Member":
        """Rebuild a member from the output of ``to_dict``."""
        return cls(**{**data, "dob": date.fromisoformat(data["dob"])})
