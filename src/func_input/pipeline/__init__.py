"""Local batch host: workers, runner, logging and reports."""
