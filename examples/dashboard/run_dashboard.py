from pathlib import Path

from chartpipeline.cli.output import print_summary
from chartpipeline.config.charts import load_chart_config
from chartpipeline.pipeline.charts import build_pipeline
from chartpipeline.utils.load import load_records


def main() -> None:
    root = Path(__file__).resolve().parent
    records = load_records(root / "data/orders.json")
    for name in ("area", "bar", "gauge", "map"):
        config = load_chart_config(root / "config" / f"{name}.yaml")
        pipeline = build_pipeline(config, records=records, width=640)
        print_summary(pipeline.result)


if __name__ == "__main__":
    main()
