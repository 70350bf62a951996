"""
Initial data loaded into the stores at start-up.

These records reproduce the demo state the dashboard ships with: two
laboratories with machines and inventory, two clients with ordered
tests, technician assignments, a short activity history, the four
canonical staff accounts and the default chat channels.

Seed ids are short fixed strings (``"1"``, ``"inv-1"``, ``"admin-1"``)
so clients and tests can refer to them; records created at runtime
get generated ids.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Any, Dict, List, Optional

PROTECTED_CHANNEL_IDS = ("general", "inter-lab")

# Permission sets granted to the canonical roles when a user is created
# or changes role without an explicit permission list.
ROLE_PERMISSIONS: Dict[str, List[str]] = {
    "Admin": [
        "manage_labs",
        "manage_users",
        "view_all",
        "assign_tests",
        "manage_inventory",
        "delete_labs",
        "delete_machines",
        "manage_permissions",
        "view_activities",
        "system_admin",
    ],
    "Jefe de Lab": [
        "manage_labs",
        "view_all",
        "assign_tests",
        "manage_inventory",
        "view_activities",
    ],
    "Técnico": [
        "view_assigned",
        "update_tests",
        "view_inventory",
    ],
    "Patóloga": [
        "view_results",
        "approve_tests",
        "view_all",
    ],
}


def utcnow_iso(offset: timedelta = timedelta(0)) -> str:
    """ISO-8601 UTC timestamp with millisecond precision and ``Z`` suffix."""
    moment = datetime.now(timezone.utc) + offset
    return moment.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def parse_timestamp(value: Any) -> Optional[datetime]:
    """Parse a stored ISO-8601 timestamp; naive values are taken as UTC."""
    if not isinstance(value, str) or not value:
        return None
    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def laboratories() -> List[Dict[str, Any]]:
    return [
        {"id": "1", "name": "Lab Central Norte", "address": "Av. Principal 123, Ciudad"},
        {"id": "2", "name": "Lab Sur", "address": "Calle Sur 456, Ciudad"},
    ]


def machines() -> List[Dict[str, Any]]:
    return [
        {
            "id": "1-1",
            "labId": "1",
            "name": "Analizador Hematológico",
            "type": "Hematología",
            "status": "operativa",
        },
    ]


def machine_records() -> List[Dict[str, Any]]:
    return [
        {
            "id": "1-1-1",
            "machineId": "1-1",
            "testName": "Hemograma Completo",
            "date": "2024-01-15",
            "status": "completada",
            "notes": "Paciente en ayunas",
            "parameters": [
                {
                    "name": "Hemoglobina",
                    "value": "14.2",
                    "unit": "g/dL",
                    "referenceMin": 12.0,
                    "referenceMax": 16.0,
                    "status": "normal",
                },
            ],
        },
    ]


def inventory() -> List[Dict[str, Any]]:
    return [
        {
            "id": "inv-1",
            "labId": "1",
            "name": "Tubos de ensayo",
            "category": "Material de laboratorio",
            "quantity": 150,
            "unit": "unidades",
            "minStock": 50,
            "expirationDate": "2025-12-31",
            "supplier": "LabSupply Co.",
            "notes": "Tubos de vidrio estándar",
            "status": "disponible",
        },
        {
            "id": "inv-2",
            "labId": "1",
            "name": "Reactivos para hemograma",
            "category": "Reactivos",
            "quantity": 25,
            "unit": "botellas",
            "minStock": 30,
            "expirationDate": "2024-06-15",
            "supplier": "ChemLab Solutions",
            "notes": "Reactivos específicos para análisis hematológico",
            "status": "bajo_stock",
        },
        {
            "id": "inv-3",
            "labId": "1",
            "name": "Guantes de látex",
            "category": "Equipo de protección",
            "quantity": 0,
            "unit": "cajas",
            "minStock": 10,
            "expirationDate": "2026-03-20",
            "supplier": "SafetyFirst Inc.",
            "notes": "Guantes tamaño M y L",
            "status": "agotado",
        },
        {
            "id": "inv-4",
            "labId": "2",
            "name": "Microscopios",
            "category": "Equipos",
            "quantity": 3,
            "unit": "unidades",
            "minStock": 2,
            "expirationDate": "2030-01-01",
            "supplier": "Optical Systems",
            "notes": "Microscopios de alta resolución",
            "status": "disponible",
        },
    ]


def clients() -> List[Dict[str, Any]]:
    return [
        {"id": "1", "name": "Juan Pérez", "email": "juan@email.com", "phone": "555-0123"},
        {"id": "2", "name": "María González", "email": "maria@email.com", "phone": "555-0456"},
    ]


def client_tests() -> List[Dict[str, Any]]:
    return [
        {
            "id": "ct1",
            "testId": "t1",
            "testName": "Hemograma Completo",
            "clientId": "1",
            "orderDate": "2024-01-15",
            "status": "completada",
            "results": [
                {
                    "name": "Hemoglobina",
                    "value": "14.2",
                    "unit": "g/dL",
                    "referenceMin": 12.0,
                    "referenceMax": 16.0,
                    "status": "normal",
                },
            ],
        },
        {
            "id": "ct2",
            "testId": "t2",
            "testName": "Química Sanguínea",
            "clientId": "2",
            "orderDate": "2024-01-20",
            "status": "en_proceso",
            "assignedTo": "María López",
            "assignedBy": "Dr. Carlos Mendez",
            "assignedDate": "2024-01-20",
        },
    ]


def assignments() -> List[Dict[str, Any]]:
    return [
        {
            "id": "assignment-1",
            "testId": "t1",
            "clientTestId": "ct1",
            "recordId": "1-1-1",
            "technicianId": "tecnico-1",
            "technicianName": "María López",
            "assignedBy": "Dr. Carlos Mendez",
            "assignedDate": "2024-01-15T10:00:00Z",
            "status": "completada",
            "notes": "Prueba completada exitosamente",
        },
        {
            "id": "assignment-2",
            "testId": "t2",
            "clientTestId": "ct2",
            "technicianId": "tecnico-1",
            "technicianName": "María López",
            "assignedBy": "Dr. Carlos Mendez",
            "assignedDate": "2024-01-20T14:30:00Z",
            "status": "en_proceso",
            "notes": "Prueba en proceso de análisis",
        },
    ]


def activities() -> List[Dict[str, Any]]:
    hour = timedelta(hours=1)
    return [
        {
            "id": "activity-1",
            "userId": "admin-1",
            "userName": "Dr. Ana García",
            "userRole": "Admin",
            "action": "login",
            "description": "Dr. Ana García inició sesión en el sistema",
            "timestamp": utcnow_iso(-hour),
            "category": "authentication",
        },
        {
            "id": "activity-2",
            "userId": "jefe-1",
            "userName": "Dr. Carlos Mendez",
            "userRole": "Jefe de Lab",
            "action": "create_lab",
            "description": "Dr. Carlos Mendez creó el laboratorio Lab Sur",
            "timestamp": utcnow_iso(-2 * hour),
            "category": "lab_management",
            "relatedId": "2",
            "relatedName": "Lab Sur",
        },
        {
            "id": "activity-3",
            "userId": "tecnico-1",
            "userName": "María López",
            "userRole": "Técnico",
            "action": "assign_test",
            "description": "María López asignó prueba Química Sanguínea a María González",
            "timestamp": utcnow_iso(-3 * hour),
            "category": "test_management",
            "relatedId": "ct2",
            "relatedName": "Química Sanguínea",
        },
        {
            "id": "activity-4",
            "userId": "admin-1",
            "userName": "Dr. Ana García",
            "userRole": "Admin",
            "action": "add_inventory",
            "description": "Dr. Ana García agregó Microscopios al inventario del Lab Sur",
            "timestamp": utcnow_iso(-4 * hour),
            "category": "inventory",
            "relatedId": "inv-4",
            "relatedName": "Microscopios",
        },
        {
            "id": "activity-5",
            "userId": "jefe-1",
            "userName": "Dr. Carlos Mendez",
            "userRole": "Jefe de Lab",
            "action": "send_message",
            "description": "Dr. Carlos Mendez envió mensaje en canal General",
            "timestamp": utcnow_iso(-5 * hour),
            "category": "communication",
            "relatedId": "general",
            "relatedName": "Canal General",
        },
    ]


# (id, name, role, email, plain password, online, labId)
STAFF = [
    ("admin-1", "Dr. Ana García", "Admin", "admin@alquimist.com", "admin123", True, "lab-1"),
    ("jefe-1", "Dr. Carlos Mendez", "Jefe de Lab", "jefe@alquimist.com", "jefe123", True, "lab-1"),
    ("tecnico-1", "María López", "Técnico", "tecnico@alquimist.com", "tecnico123", True, "lab-1"),
    ("patologa-1", "Dra. Elena Ruiz", "Patóloga", "patologa@alquimist.com", "patologa123", False, "lab-2"),
]


def users(hasher) -> List[Dict[str, Any]]:
    """Staff accounts; ``hasher`` turns the plain password into its stored form."""
    return [
        {
            "id": user_id,
            "name": name,
            "role": role,
            "email": email,
            "password": hasher(password),
            "permissions": list(ROLE_PERMISSIONS[role]),
            "isOnline": online,
            "labId": lab_id,
        }
        for user_id, name, role, email, password, online, lab_id in STAFF
    ]


def chat_snapshot() -> Dict[str, List[Dict[str, Any]]]:
    """Initial chat state written when no snapshot file exists yet."""
    now = utcnow_iso()
    welcome = {
        "id": "msg1",
        "channelId": "general",
        "userId": "admin-1",
        "userName": "Dr. Ana García",
        "userRole": "Admin",
        "content": "¡Bienvenidos al sistema de chat interno!",
        "timestamp": now,
        "type": "message",
    }
    channels = [
        {
            "id": "general",
            "name": "General",
            "type": "general",
            "participants": [],
            "createdAt": now,
            "createdBy": "system",
            "lastMessage": welcome,
        },
        {
            "id": "inter-lab",
            "name": "Inter-Lab",
            "type": "general",
            "participants": [],
            "createdAt": now,
            "createdBy": "system",
        },
    ]
    roster = [
        {
            "id": user_id,
            "name": name,
            "role": role,
            "email": email,
            "isOnline": online,
            "labId": lab_id,
            "lastSeen": now if online else utcnow_iso(-timedelta(hours=1)),
        }
        for user_id, name, role, email, _password, online, lab_id in STAFF
    ]
    return {"messages": [welcome], "channels": channels, "users": roster}
