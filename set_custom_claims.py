# set_custom_claims.py
# Asigna el rol (custom claim "role") a usuarios de Firebase Authentication.
# Uso: python set_custom_claims.py admin@worksafe.com admin auditor@worksafe.com auditor
import sys

from firebase_admin import auth

from app.config.firebase_init import initialize_firebase
from app.config.settings import ROLES


def assign_roles(pairs):
    failures = 0
    for email, role in pairs:
        if role not in ROLES:
            print(f"Rol inválido para {email}: {role} (use uno de {', '.join(ROLES)})")
            failures += 1
            continue
        try:
            user = auth.get_user_by_email(email)
            auth.set_custom_user_claims(user.uid, {"role": role})
            print(f"Custom claim 'role: {role}' asignado al usuario {email} (UID: {user.uid})")
        except (auth.UserNotFoundError, ValueError) as e:
            print(f"Error al asignar claim a {email}: {str(e)}")
            failures += 1
    return failures


if __name__ == "__main__":
    args = sys.argv[1:]
    if not args or len(args) % 2:
        print("Uso: python set_custom_claims.py <email> <rol> [<email> <rol> ...]")
        sys.exit(2)
    initialize_firebase()
    failed = assign_roles(zip(args[::2], args[1::2]))
    print("Proceso de asignación de custom claims completado.")
    sys.exit(1 if failed else 0)
