"""
Selects the platform helpers for the current runtime.

Inside AWS Lambda parameters come from the SSM Parameter Store and logs go to CloudWatch;
everywhere else parameters come from environment variables (and `.env`).
"""

import os

if os.getenv("AWS_LAMBDA_FUNCTION_NAME"):
    from agent_bootstrap.infrastructure.aws_platform_manager import (
        create_logger,
        get_parameters,
    )
else:
    from agent_bootstrap.infrastructure.local_platform_manager import (  # type: ignore[assignment]
        create_logger,
        get_parameters,
    )

__all__ = ["create_logger", "get_parameters"]
