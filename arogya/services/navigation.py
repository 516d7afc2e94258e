from typing import Dict, List

from ..core.security import Identity, Role
from ..schemas.navigation import MenuItem, MenuSection, NavigationResponse
from .auth_service import HOME_BY_ROLE

NAVIGATION: Dict[Role, List[MenuSection]] = {
    Role.DOCTOR: [
        MenuSection(label="Doctor", items=[
            MenuItem(title="Dashboard", url="/dashboard"),
            MenuItem(title="Patients", url="/patients"),
            MenuItem(title="Schedule", url="/schedule"),
            MenuItem(title="Profile", url="/profile"),
        ]),
    ],
    Role.PATIENT: [
        MenuSection(label="Patient Portal", items=[
            MenuItem(title="Dashboard", url="/patient-dashboard"),
            MenuItem(title="Appointments", url="/patient-appointments"),
            MenuItem(title="Medical Records", url="/patient-records"),
            MenuItem(title="Profile", url="/patient-profile"),
        ]),
        MenuSection(label="Veterinary Services", items=[
            MenuItem(title="Vet Appointments", url="/veterinary-appointments"),
            MenuItem(title="Animal Records", url="/animal-records"),
            MenuItem(title="Emergency Help", url="/veterinary-emergency"),
            MenuItem(title="Knowledge Corner", url="/veterinary-knowledge"),
        ]),
    ],
    Role.NONE: [],
}


def navigation_for(identity: Identity) -> NavigationResponse:
    return NavigationResponse(
        role=identity.role,
        home=HOME_BY_ROLE[identity.role],
        sections=NAVIGATION[identity.role],
    )
