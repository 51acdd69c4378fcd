from __future__ import annotations

from django.contrib.auth import get_user_model
from django.contrib.auth.models import Group
from django.core.management.base import BaseCommand

from modules.clientes.models import Cliente
from modules.core.permissions import Role


class Command(BaseCommand):
    help = "Seed database with role groups, demo accounts and sample clientes."

    def handle(self, *args, **options):
        self.stdout.write("Seeding development data...")

        groups = self._seed_groups()
        users_created = self._seed_users(groups)
        clientes = self._seed_clientes()

        self.stdout.write(
            self.style.SUCCESS(
                "Seed completed: "
                f"groups={len(groups)}, "
                f"users={users_created}, "
                f"clientes={len(clientes)}"
            )
        )

    def _seed_groups(self) -> dict[Role, Group]:
        return {role: Group.objects.get_or_create(name=role.value)[0] for role in Role}

    def _seed_users(self, groups: dict[Role, Group]) -> int:
        User = get_user_model()
        created = 0
        accounts = [
            ("admin", "admin123", Role.ADMIN),
            ("user", "user123", Role.USER),
        ]
        for username, password, role in accounts:
            user = User.objects.filter(username=username).first()
            if user is None:
                user = User.objects.create_user(username, password=password)
                created += 1
            user.groups.add(groups[role])
        return created

    def _seed_clientes(self) -> list[Cliente]:
        self.stdout.write("Creating clientes...")
        seed_clientes = [
            ("Ana Gómez", "ana@example.com", "3001234567"),
            ("Bruno Díaz", "bruno@example.com", "3017654321"),
            ("Carla Méndez", "carla@example.com", ""),
            ("Daniel Castro", "daniel@example.com", "+57 601 555 0101"),
            ("Elena Ruiz", "elena@example.com", "3109876543"),
        ]
        clientes: list[Cliente] = []
        for name, email, phone in seed_clientes:
            cliente, _ = Cliente.objects.get_or_create(
                email=email,
                defaults={"name": name, "phone": phone},
            )
            clientes.append(cliente)
        self.stdout.write(self.style.SUCCESS("Creating clientes... Done!"))
        return clientes
