"""
Plant Energy Intelligence — analytics backend

Turns daily plant operating sheets (CSV or Excel) into processed energy
and emissions records ready for dashboard cards, gauges and peer
benchmarking.

Pipeline:
    loaders.load_plant_records(path) -> list[RawRecord]
    transforms.process_records(raws) -> list[ProcessedRecord]
    dataset.build_dataset(raws)      -> PlantDataset (dates, plants, lookups)

To connect to Streamlit/Dash:
    Hold a dataset.DatasetStore, call store.load(path) on upload and pass
    store.current to dashboard.get_plant_overview(dataset, date, plant, unit).

To add new KPIs:
    Compute the value in transforms.process_record, add a field to
    records.ProcessedRecord and register its unit and gauge thresholds in
    config.KPI_REGISTRY.
"""
