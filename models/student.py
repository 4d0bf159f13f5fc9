# models/student.py

"""
Represents a student on the roster.

Stores the identifying and academic fields of a student record: a unique ID, the student number (NIM),
name, email, department (jurusan), semester, grade-point average (IPK), and the enrollment date.

Includes functionality for:
- Normalizing the student number to uppercase on write
- Distinguishing standard and graduate students through a tagged kind rather than subclassing
- Serializing to and from JSON-compatible dictionaries using the storage key names
- Mutating individual fields via property access

Field-level validation lives in `core.validation`; a `Student` object only enforces normalization,
so that imported records can be held exactly as they were read.
"""

from __future__ import annotations

from enum import Enum

# fields an update may change; `id` and `tanggal_masuk` are fixed at creation
MUTABLE_FIELDS: tuple[str, ...] = ("nim", "nama", "email", "jurusan", "semester", "ipk")


class StudentKind(str, Enum):
    STANDARD = "Standard"
    GRADUATE = "Graduate"


class Student:

    def __init__(
        self,
        id: str,
        nim: str,
        nama: str,
        email: str,
        jurusan: str,
        semester: int,
        ipk: float,
        tanggal_masuk: str,
        thesis: str | None = None,
    ):
        self._id: str = id
        self._nim: str = Student.normalize_nim(nim)
        self._nama: str = nama
        self._email: str = email
        self._jurusan: str = jurusan
        self._semester: int = semester
        self._ipk: float = ipk
        self._tanggal_masuk: str = tanggal_masuk
        self._thesis: str | None = thesis

    # === properties ===

    @property
    def id(self) -> str:
        return self._id

    @property
    def nim(self) -> str:
        return self._nim

    @nim.setter
    def nim(self, nim: str) -> None:
        self._nim = Student.normalize_nim(nim)

    @property
    def nama(self) -> str:
        return self._nama

    @nama.setter
    def nama(self, nama: str) -> None:
        self._nama = nama

    @property
    def email(self) -> str:
        return self._email

    @email.setter
    def email(self, email: str) -> None:
        self._email = email

    @property
    def jurusan(self) -> str:
        return self._jurusan

    @jurusan.setter
    def jurusan(self, jurusan: str) -> None:
        self._jurusan = jurusan

    @property
    def semester(self) -> int:
        return self._semester

    @semester.setter
    def semester(self, semester: int) -> None:
        self._semester = semester

    @property
    def ipk(self) -> float:
        return self._ipk

    @ipk.setter
    def ipk(self, ipk: float) -> None:
        self._ipk = ipk

    @property
    def tanggal_masuk(self) -> str:
        return self._tanggal_masuk

    # --- graduate variant ---

    @property
    def thesis(self) -> str | None:
        return self._thesis

    @thesis.setter
    def thesis(self, thesis: str | None) -> None:
        self._thesis = thesis

    @property
    def kind(self) -> StudentKind:
        return StudentKind.GRADUATE if self._thesis is not None else StudentKind.STANDARD

    @property
    def is_graduate(self) -> bool:
        return self.kind is StudentKind.GRADUATE

    def info(self) -> str:
        summary = f"{self._nama} ({self._nim}) - {self._jurusan}"

        if self.is_graduate:
            return f"{summary} - Thesis: {self._thesis}"

        return summary

    # === persistence and import ===

    def to_dict(self) -> dict:
        data = {
            "id": self._id,
            "nim": self._nim,
            "nama": self._nama,
            "email": self._email,
            "jurusan": self._jurusan,
            "semester": self._semester,
            "ipk": self._ipk,
            "tanggalMasuk": self._tanggal_masuk,
        }

        if self._thesis is not None:
            data["thesis"] = self._thesis

        return data

    @classmethod
    def from_dict(cls, data: dict) -> Student:
        if not isinstance(data, dict):
            raise TypeError(f"Expected a record dictionary, got {type(data).__name__}.")

        return cls(
            id=data["id"],
            nim=data["nim"],
            nama=data["nama"],
            email=data["email"],
            jurusan=data["jurusan"],
            semester=data["semester"],
            ipk=data["ipk"],
            tanggal_masuk=data["tanggalMasuk"],
            thesis=data.get("thesis"),
        )

    # === dunder methods ===

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Student):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def __repr__(self) -> str:
        return f"Student({self._id}, {self._nim}, {self._nama}, {self._email}, {self._jurusan}, {self._semester}, {self._ipk})"

    def __str__(self) -> str:
        return f"STUDENT: {self._nama} - NIM: {self._nim} - (ID: {self._id})"

    # === data validators ===

    @staticmethod
    def normalize_nim(nim: str) -> str:
        """
        Normalizes a student number for storage.

        Args:
            nim: The raw student number.

        Returns:
            The student number stripped of surrounding whitespace and converted to uppercase. Non-string input is returned unchanged
            so that structurally imported records are held as-is.
        """
        return nim.strip().upper() if isinstance(nim, str) else nim
