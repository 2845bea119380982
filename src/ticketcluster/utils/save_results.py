import json
import os
from datetime import datetime
from pathlib import Path

import folium
import numpy as np
import pandas as pd
import seaborn as sns

from ticketcluster.config.parameters import Parameters
from ticketcluster.core_types import ClusteringResult, ticket_to_dict
from ticketcluster.clustering.aggregation import summarize_clusters

def results_dir() -> Path:
    """Directory for result files; PROJECT_RESULTS_DIR overrides the repository default."""
    override = os.environ.get('PROJECT_RESULTS_DIR')
    if override:
        return Path(override)
    return Path(__file__).resolve().parent.parent.parent.parent / 'results'

def save_clustering_results(
    result: ClusteringResult,
    parameters: Parameters,
    filename: str | Path = None,
    format: str = 'json',
    visualize: bool = False
) -> Path:
    """Save clustering results to a file (Excel or JSON) and optionally create a map"""

    # Create timestamp and filename if not provided
    if filename is None:
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        extension = '.xlsx' if format == 'excel' else '.json'
        filename = results_dir() / f"clustering_results_{timestamp}{extension}"
    filename = Path(filename)

    # Ensure results directory exists
    filename.parent.mkdir(parents=True, exist_ok=True)

    cluster_details = summarize_clusters(result)
    sizes = cluster_details['Num_Tickets'] if not cluster_details.empty else pd.Series(dtype=float)
    policy = parameters.sizing_policy

    summary_metrics = [
        ('Total Tickets', result.total_tickets_clustered + len(result.unclustered_tickets)),
        ('Total Clusters', result.total_clusters),
        ('Tickets Clustered', result.total_tickets_clustered),
        ('Unclustered Tickets', len(result.unclustered_tickets)),
        ('Clustering Efficiency (%)', result.clustering_efficiency),
        ('Tickets per Cluster (Min)', f"{sizes.min():.0f}" if len(sizes) else 'N/A'),
        ('Tickets per Cluster (Max)', f"{sizes.max():.0f}" if len(sizes) else 'N/A'),
        ('Tickets per Cluster (Avg)', f"{sizes.mean():.1f}" if len(sizes) else 'N/A'),
        ('Max Spread Km (Avg)', f"{cluster_details['Max_Distance_Km'].mean():.2f}" if len(sizes) else 'N/A'),
        ('---Parameters---', ''),
        ('Ticket File', parameters.ticket_file),
        ('Radius (km)', parameters.radius_km),
        ('Sizing Policy', policy.describe()),
        ('Prioritize High Priority', parameters.prioritize_high_priority),
        ('---Algorithm---', ''),
        ('Method', result.algorithm_stats.method),
        ('Iterations', result.algorithm_stats.iterations),
        ('Execution Time (ms)', round(result.algorithm_stats.execution_time_ms, 3)),
    ]

    data = {
        'summary_metrics': summary_metrics,
        'cluster_details': cluster_details,
        'cluster_tickets': _cluster_tickets_frame(result),
        'unclustered_tickets': pd.DataFrame(
            [ticket_to_dict(t) for t in result.unclustered_tickets]
        ),
        'result': result.to_dict(),
    }

    try:
        if format == 'json':
            _write_to_json(filename, data)
        else:
            _write_to_excel(filename, data)

        if visualize:
            visualize_clusters(result, filename)

    except Exception as e:
        print(f"Error saving results to {filename}: {str(e)}")
        raise

    return filename

def _cluster_tickets_frame(result: ClusteringResult) -> pd.DataFrame:
    rows = []
    for cluster in result.clusters:
        for position, ticket in enumerate(cluster.tickets):
            row = {'Cluster_ID': cluster.cluster_id, 'Position': position}
            row.update(ticket_to_dict(ticket))
            rows.append(row)
    return pd.DataFrame(rows)

def _excel_safe(df: pd.DataFrame) -> pd.DataFrame:
    """Nested values (dicts, lists) cannot be written to cells; store them as JSON text."""
    def _cell(value):
        return json.dumps(value, default=str) if isinstance(value, (dict, list, tuple)) else value
    return df.apply(lambda column: column.map(_cell)) if not df.empty else df

def _write_to_excel(filename: Path, data: dict) -> None:
    """Write clustering results to Excel file."""
    with pd.ExcelWriter(filename, engine='openpyxl') as writer:
        # Sheet 1: Summary
        pd.DataFrame(data['summary_metrics'], columns=['Metric', 'Value']).astype(str).to_excel(
            writer, sheet_name='Summary', index=False
        )

        # Sheet 2: Clusters
        data['cluster_details'].to_excel(
            writer, sheet_name='Clusters', index=False
        )

        # Sheet 3: Tickets per cluster
        _excel_safe(data['cluster_tickets']).to_excel(
            writer, sheet_name='Cluster Tickets', index=False
        )

        # Sheet 4: Leftovers
        _excel_safe(data['unclustered_tickets']).to_excel(
            writer, sheet_name='Unclustered Tickets', index=False
        )

def _write_to_json(filename: Path, data: dict) -> None:
    """Write clustering results to JSON file."""
    class NumpyEncoder(json.JSONEncoder):
        def default(self, obj):
            if isinstance(obj, np.integer):
                return int(obj)
            if isinstance(obj, np.floating):
                return float(obj)
            if isinstance(obj, np.ndarray):
                return obj.tolist()
            return super().default(obj)

    json_data = {
        'Summary': dict(data['summary_metrics']),
        'Clusters': data['cluster_details'].to_dict(orient='records'),
        'Result': data['result'],
    }

    with open(filename, 'w') as f:
        json.dump(json_data, f, indent=2, cls=NumpyEncoder)

def visualize_clusters(result: ClusteringResult, filename: str | Path) -> Path:
    """
    Create and save an interactive map of the clusters.

    Args:
        result: Clustering result to draw
        filename: Base filename; the map is written next to it as <stem>_clusters.html

    Returns:
        Path of the written HTML file
    """
    all_tickets = [t for c in result.clusters for t in c.tickets] + list(result.unclustered_tickets)
    if all_tickets:
        center = [
            float(np.mean([t.lat for t in all_tickets])),
            float(np.mean([t.lng for t in all_tickets]))
        ]
    else:
        center = [0.0, 0.0]

    m = folium.Map(location=center, zoom_start=7, tiles='CartoDB positron')

    # Create color palette for clusters
    n_clusters = len(result.clusters)
    colors = sns.color_palette("husl", n_colors=n_clusters).as_hex() if n_clusters else []

    for color, cluster in zip(colors, result.clusters):
        layer = folium.FeatureGroup(name=f"{cluster.cluster_id} ({cluster.size})")

        popup_content = f"""
            <b>Cluster ID:</b> {cluster.cluster_id}<br>
            <b>Tickets:</b> {cluster.size}<br>
            <b>Seed:</b> {cluster.seed.id}<br>
            <b>Max spread:</b> {cluster.max_distance_km:.2f} km<br>
            <b>Total distance:</b> {cluster.total_distance_km:.2f} km
        """
        folium.Circle(
            location=(cluster.center_point.lat, cluster.center_point.lng),
            radius=max(cluster.max_distance_km, 0.05) * 1000,
            color=color,
            fill=True,
            fill_opacity=0.15,
            popup=folium.Popup(popup_content, max_width=300),
        ).add_to(layer)

        for ticket in cluster.tickets:
            folium.CircleMarker(
                location=(ticket.lat, ticket.lng),
                radius=6,
                color=color,
                fill=True,
                fill_opacity=0.8,
                popup=f"{ticket.id} ({getattr(ticket, 'priority', None) or 'No priority'})",
            ).add_to(layer)
        layer.add_to(m)

    if result.unclustered_tickets:
        leftovers = folium.FeatureGroup(name=f"Unclustered ({len(result.unclustered_tickets)})")
        for ticket in result.unclustered_tickets:
            folium.CircleMarker(
                location=(ticket.lat, ticket.lng),
                radius=5,
                color='gray',
                fill=True,
                popup=f"{ticket.id} (unclustered)",
            ).add_to(leftovers)
        leftovers.add_to(m)

    # Add layer control
    folium.LayerControl().add_to(m)

    viz_filename = Path(str(filename).rsplit('.', 1)[0] + '_clusters.html')
    m.save(str(viz_filename))
    return viz_filename
