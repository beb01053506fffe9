"""Export or restore the ChronoGuard store as an SQL script.

Usage:
    python scripts/backup.py export --mongodb-url mongodb://localhost:27017 \\
        --as-user m1 --output backup.sql
    python scripts/backup.py import --mongodb-url mongodb://localhost:27017 \\
        --as-user m1 --input backup.sql

JWT_SECRET must be set (environment or .env), as for the API.
"""
import argparse
import asyncio
import sys
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from motor.motor_asyncio import AsyncIOMotorClient
from chronoguard.services.backup_service import BackupService
from chronoguard.services.errors import PermissionDeniedError
from chronoguard.services.user_service import UserService


async def run(args: argparse.Namespace) -> int:
    """Run the selected backup command. Returns the process exit code."""
    client = AsyncIOMotorClient(args.mongodb_url)
    db = client[args.db_name]
    try:
        actor = await UserService(db).get_user(args.as_user)
        service = BackupService(db)

        if args.command == "export":
            script = await service.export_sql(actor)
            Path(args.output).write_text(script, encoding="utf-8")
            print(f"Wrote {args.output}")
        else:
            script = Path(args.input).read_text(encoding="utf-8")
            counts = await service.import_sql(actor, script)
            for table, count in counts.items():
                print(f"  {table}: {count} rows")
            print("Done!")
        return 0
    except (ValueError, PermissionDeniedError) as e:
        print(f"Error: {e}")
        return 1
    finally:
        client.close()


def main() -> int:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("command", choices=["export", "import"])
    parser.add_argument("--mongodb-url", required=True)
    parser.add_argument("--db-name", default="chronoguard")
    parser.add_argument("--as-user", required=True, help="Manager user ID")
    parser.add_argument("--output", default="chronoguard_backup.sql")
    parser.add_argument("--input", default="chronoguard_backup.sql")
    return asyncio.run(run(parser.parse_args()))


if __name__ == "__main__":
    sys.exit(main())
