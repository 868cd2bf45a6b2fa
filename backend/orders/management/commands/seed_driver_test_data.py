from django.core.management.base import BaseCommand

from orders.seed import create_driver_test_data, cleanup_driver_test_data


class Command(BaseCommand):
    help = "Create the San Francisco driver/order test scenario (or remove it with --cleanup)."

    def add_arguments(self, parser):
        parser.add_argument(
            "--cleanup",
            action="store_true",
            help="Remove the test orders instead of creating them.",
        )

    def handle(self, *args, **options):
        if options["cleanup"]:
            deleted = cleanup_driver_test_data()
            self.stdout.write(self.style.SUCCESS(f"Removed test orders ({deleted} rows deleted)."))
            return

        data = create_driver_test_data()
        self.stdout.write(
            self.style.SUCCESS(
                f"Created {len(data.drivers)} test drivers and {len(data.orders)} test orders."
            )
        )
        for username, profile in data.drivers.items():
            self.stdout.write(
                f"  {username}: ({profile.current_latitude}, {profile.current_longitude}) "
                f"radius {profile.max_delivery_radius}km"
            )
