from pathlib import Path


BASE_DIR = Path(__file__).resolve().parent.parent.parent.parent

LOG_DIR = BASE_DIR / 'logs'

# members.csv / inventory.csv used by the startup seeder
DATA_DIR = BASE_DIR / 'data'
