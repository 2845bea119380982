from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Optional
import yaml

from ticketcluster.clustering.sizing import resolve_sizing_policy
from ticketcluster.clustering.validation import ClusteringLimits

@dataclass
class Parameters:
    """Configuration parameters for ticket clustering"""
    ticket_file: str
    radius_km: float
    cluster_size: Optional[int] = None
    min_cluster_size: Optional[int] = None
    max_cluster_size: Optional[int] = None
    precise_cluster_size: Optional[int] = None
    prioritize_high_priority: bool = True
    format: str = 'json'
    limits: Dict = field(default_factory=dict)
    jira_location_field: str = 'customfield_10840'
    nearby_suggestion_size: int = 3

    @classmethod
    def from_yaml(cls, path: Path | str = None) -> 'Parameters':
        """Load parameters from YAML file"""
        if path is None:
            path = Path(__file__).parent / 'default_config.yaml'
        
        with open(path) as f:
            data = yaml.safe_load(f)
            return cls(**data)

    @property
    def clustering_limits(self) -> ClusteringLimits:
        return ClusteringLimits(**(self.limits or {}))

    @property
    def sizing_policy(self):
        return resolve_sizing_policy(
            cluster_size=self.cluster_size,
            min_cluster_size=self.min_cluster_size,
            max_cluster_size=self.max_cluster_size,
            precise_cluster_size=self.precise_cluster_size,
        )

    def __post_init__(self):
        """Validate parameters after initialization"""
        if self.format not in ('json', 'excel'):
            raise ValueError(f"format must be 'json' or 'excel'. Got: {self.format}")

        if self.radius_km is None or self.radius_km <= 0:
            raise ValueError(f"radius_km must be positive. Got: {self.radius_km}")

        # Raises ValueError on malformed or unknown limit keys
        try:
            self.clustering_limits
        except TypeError as e:
            raise ValueError(f"Invalid limits: {e}") from e

        for name in ('cluster_size', 'min_cluster_size', 'max_cluster_size', 'precise_cluster_size'):
            value = getattr(self, name)
            if value is not None and (not isinstance(value, int) or value <= 0):
                raise ValueError(f"{name} must be a positive integer. Got: {value}")

        if (self.min_cluster_size is not None and self.max_cluster_size is not None
                and self.min_cluster_size > self.max_cluster_size):
            raise ValueError(
                f"min_cluster_size must not exceed max_cluster_size. Got: "
                f"min_cluster_size={self.min_cluster_size}, max_cluster_size={self.max_cluster_size}"
            )

        if not isinstance(self.nearby_suggestion_size, int) or self.nearby_suggestion_size < 2:
            raise ValueError(
                f"nearby_suggestion_size must be an integer >= 2. Got: {self.nearby_suggestion_size}"
            )
