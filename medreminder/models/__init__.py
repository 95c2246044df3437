from .account_type import AccountType
from .user import User
from .user_profile import UserProfile
from .medication import Medication
from .interaction import Interaction
from .pharmacy import Pharmacy
from .pharmacy_stock import PharmacyStock
from .prescription import Prescription
from .prescription_item import PrescriptionItem
from .dose_event import DoseEvent
from .notification_channel import NotificationChannel
from .notification_preference import NotificationPreference
