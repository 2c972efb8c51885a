"""Provider domain entity for the pharmacy service."""

from dataclasses import asdict, dataclass
from typing import Any, Dict, Optional


@dataclass
class Provider:
    """Domain entity representing a prescribing or dispensing provider.

    Attributes:
        id (Optional[int]): Store-assigned identifier. None for new providers.
        provider_number (str): Business-unique provider number.
        name (str): Provider display name.
        npi (str): National Provider Identifier, unique across providers.
        address (str): Practice address.
        phone (str): Contact phone number.
        email (str): Contact email address.
        specialty (str): Clinical specialty.
    """

    id: Optional[int]
    provider_number: str
    name: str
    npi: str
    address: str = ""
    phone: str = ""
    email: str = ""
    specialty: str = ""

    def __post_init__(self):
        if not self.provider_number or not self.provider_number.strip():
            raise ValueError("Provider number cannot be empty")
        if not self.name.strip():
            raise ValueError("Provider name cannot be empty")
        if not self.npi.strip():
            raise ValueError("Provider NPI cannot be empty")

    def is_new(self) -> bool:
        """Check if this provider has not been persisted yet."""
        return self.id is None

    def update_details(
        self,
        name: str,
        npi: str,
        address: str,
        phone: str,
        email: str,
        specialty: str,
    ) -> None:
        """Replace the mutable provider details.

        Raises:
            ValueError: If name or NPI are empty.
        """
        if not name.strip():
            raise ValueError("Provider name cannot be empty")
        if not npi.strip():
            raise ValueError("Provider NPI cannot be empty")

        self.name = name
        self.npi = npi
        self.address = address
        self.phone = phone
        self.email = email
        self.specialty = specialty

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Provider":
        return cls(**data)
