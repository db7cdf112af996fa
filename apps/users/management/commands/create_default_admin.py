from django.conf import settings
from django.contrib.auth import get_user_model
from django.core.management.base import BaseCommand, CommandError


class Command(BaseCommand):
    help = "Create the back-office admin account if no staff user exists yet"

    def add_arguments(self, parser):
        parser.add_argument("--username", default=settings.DEFAULT_ADMIN_USERNAME)
        parser.add_argument("--password", default=settings.DEFAULT_ADMIN_PASSWORD)

    def handle(self, *args, **options):
        User = get_user_model()
        if User.objects.filter(is_staff=True).exists():
            self.stdout.write("Admin account already exists, nothing to do.")
            return

        password = options["password"]
        if not password:
            raise CommandError("Set DEFAULT_ADMIN_PASSWORD or pass --password.")

        User.objects.create_superuser(
            username=options["username"],
            email="",
            password=password,
        )
        self.stdout.write(self.style.SUCCESS(f"Created admin account '{options['username']}'."))
