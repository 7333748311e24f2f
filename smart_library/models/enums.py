import enum


class MemberType(str, enum.Enum):
    STUDENT = "Student"
    STAFF = "Staff"
    ADMIN = "Admin"


class BorrowingType(str, enum.Enum):
    INDIVIDUAL = "Individual"
    GROUP = "Group"


class TransactionStatus(str, enum.Enum):
    """
    Active -> Returned | Missing (terminal).

    Overdue is accepted for stored records but never written by the engine;
    overdue-ness of an Active transaction is derived from its due date.
    """
    ACTIVE = "Active"
    RETURNED = "Returned"
    MISSING = "Missing"
    OVERDUE = "Overdue"


class DamageType(str, enum.Enum):
    NONE = "None"
    SMALL = "Small"
    LARGE = "Large"


def enum_values(enum_cls):
    return [m.value for m in enum_cls]
