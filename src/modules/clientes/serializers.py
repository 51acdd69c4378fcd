"""Cliente DRF serializer (output rendering).

Input validation is handled by ``ClienteValidator``; this serializer only
renders persisted records.
"""

from __future__ import annotations

from rest_framework import serializers

from modules.clientes.models import Cliente


class ClienteSerializer(serializers.ModelSerializer):
    class Meta:
        model = Cliente
        fields = ["id", "name", "email", "phone", "created_at", "updated_at"]
        read_only_fields = fields
