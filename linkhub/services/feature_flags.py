"""Per-workspace beta feature flags."""
from typing import Dict, Optional

from flask import current_app

from linkhub.services.edge_config import get_edge_config
from linkhub.utils.ids import prefix_workspace_id

BETA_FEATURES_CONFIG_KEY = 'betaFeatures'


def get_feature_flags(workspace_id: Optional[str] = None, workspace_slug: Optional[str] = None) -> Dict[str, bool]:
    """
    Compute the beta feature flags of a workspace.

    The edge config document maps each feature to the workspace ids
    (ws_-tagged) or slugs it is enabled for. Self-hosted deployments without
    an edge config store get every feature enabled.

    Args:
        workspace_id: Workspace id, with or without the ws_ tag
        workspace_slug: Workspace slug

    Returns:
        Dict of feature name -> enabled
    """
    features = current_app.config.get('BETA_FEATURES', ())
    flags = {feature: False for feature in features}

    edge_config = get_edge_config()
    if not edge_config.is_available():
        return {feature: True for feature in features}

    if not workspace_id and not workspace_slug:
        return flags

    if workspace_id:
        workspace_id = prefix_workspace_id(workspace_id)

    beta_features = edge_config.get(BETA_FEATURES_CONFIG_KEY, default={}) or {}
    for feature, workspaces in beta_features.items():
        if feature not in flags:
            continue
        if (workspace_id and workspace_id in workspaces) or (workspace_slug and workspace_slug in workspaces):
            flags[feature] = True
    return flags
