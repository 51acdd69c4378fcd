from django.apps import AppConfig


class ClientesConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "modules.clientes"
    label = "clientes"
    verbose_name = "Clientes"
