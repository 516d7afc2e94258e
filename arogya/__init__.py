"""
NabhaArogya

Doctor and patient portal for rural healthcare: patient records, day
schedules and consultations for doctors; bookings, medical records and
veterinary services for patients. Authentication and storage live in an
external managed backend.
"""

__version__ = "1.0.0"
