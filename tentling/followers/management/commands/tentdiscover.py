import json

from django.core.management.base import BaseCommand

from ....discovery import DiscoveryError, discover


class Command(BaseCommand):
    help = "Discover the Tent profile of one or more entities."

    def add_arguments(self, parser):
        parser.add_argument(
            "entities",
            nargs="+",
            help="Entity URL(s) to discover.",
        )
        parser.add_argument(
            "--full",
            "-f",
            action="store_true",
            help="Print the whole profile document, not just the core info.",
        )

    def handle(self, *args, **options):
        for entity in options["entities"]:
            try:
                profile = discover(entity)
            except DiscoveryError as e:
                self.stderr.write(f"{entity}: {e.reason}")
                continue
            self.stdout.write(f"{entity}: entity={profile.entity}")
            self.stdout.write(f"  licenses: {', '.join(profile.licenses) or '-'}")
            self.stdout.write(f"  servers: {', '.join(profile.servers) or '-'}")
            if options["full"]:
                self.stdout.write(json.dumps(profile.data, indent=2))
