from .env import load_project_dotenv  # noqa: F401
from .stats import linear_regression, mean, round_half_up, std, z_score  # noqa: F401
