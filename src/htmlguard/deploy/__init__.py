"""Deploy domain — pre-deployment gate and deployment report."""

# htmlguard:domain=deploy

from htmlguard.deploy.gate import (
    SECURITY_PATTERNS,
    DeploymentResult,
    DeploymentStatus,
    SecurityPattern,
    decide_status,
    get_recommendations,
    run_predeploy_check,
)
from htmlguard.deploy.report import (
    deployment_report_to_dict,
    format_deployment,
    write_deployment_report,
)

__all__ = [
    "SECURITY_PATTERNS",
    "DeploymentResult",
    "DeploymentStatus",
    "SecurityPattern",
    "decide_status",
    "deployment_report_to_dict",
    "format_deployment",
    "get_recommendations",
    "run_predeploy_check",
    "write_deployment_report",
]
