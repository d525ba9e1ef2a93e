"""Generate chart data for HTML export."""
import json
import logging
from dataclasses import asdict

from inflation_tracker.config import Settings
from inflation_tracker.data import CpiLoader

logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(levelname)s - %(message)s")

settings = Settings()
settings.validate()

with CpiLoader(settings=settings) as loader:
    state = loader.load()
    if state.is_error:
        raise SystemExit(f"Failed to load BLS data: {state.error}")
    rows = loader.chart_rows
    metrics = loader.metrics

output = {
    'dates': [row.month_label for row in rows],
    'series': {
        name: [row.values[name] for row in rows]
        for name in (rows[0].values if rows else {})
    },
    'metrics': {
        **{k: (round(v, 2) if isinstance(v, float) else v) for k, v in asdict(metrics).items() if k != 'last_date'},
        'last_date': metrics.last_date.isoformat() if metrics.last_date else None,
    },
}

with open('chart_data.json', 'w') as f:
    json.dump(output, f)

print(f"Saved {len(rows)} months of data to chart_data.json")
