import io
import os
import time

import boto3
import numpy as np
import pandas as pd

# =========================
# Remote fallback (used when <input_dir>/<key>.csv is missing)
S3_BUCKET = "sc-pipeline-output"
S3_KEY_TEMPLATE = "statistics/{}_statistics_1000_82000.csv"
S3_REGION = "us-east-1"

COLUMNS = ["x", "y", "z", "t"]
# =========================


class TrajectorySource:
    """Anything that can turn a dataset key into a raw table."""

    def fetch(self, key: str) -> pd.DataFrame:
        raise NotImplementedError

    def describe(self, key: str) -> str:
        return key


class LocalCsvSource(TrajectorySource):
    def __init__(self, input_dir: str):
        self.input_dir = input_dir

    def path_for(self, key: str) -> str:
        return os.path.join(self.input_dir, f"{key}.csv")

    def exists(self, key: str) -> bool:
        return os.path.isfile(self.path_for(key))

    def fetch(self, key: str) -> pd.DataFrame:
        # header row + '#' comment lines
        return pd.read_csv(self.path_for(key), comment="#")

    def describe(self, key: str) -> str:
        return self.path_for(key)


class S3CsvSource(TrajectorySource):
    def __init__(self, bucket=S3_BUCKET, key_template=S3_KEY_TEMPLATE, region=S3_REGION):
        self.bucket = bucket
        self.key_template = key_template
        self.region = region

    def object_key(self, key: str) -> str:
        return self.key_template.format(key)

    def fetch(self, key: str) -> pd.DataFrame:
        # credentials come from the ambient boto3 chain (env, profile, role)
        client = boto3.client("s3", region_name=self.region)
        res = client.get_object(Bucket=self.bucket, Key=self.object_key(key))
        body = res["Body"].read()
        return pd.read_csv(io.BytesIO(body))

    def describe(self, key: str) -> str:
        return f"s3://{self.bucket}/{self.object_key(key)}"


def open_source(key: str, input_dir: str) -> TrajectorySource:
    """Local file wins; otherwise fall back to the bucket."""
    local = LocalCsvSource(input_dir)
    if local.exists(key):
        print("Read from", local.describe(key))
        return local

    print("Download from s3", key)
    return S3CsvSource()


def select_columns(df: pd.DataFrame) -> pd.DataFrame:
    """Keep x, y, z, t as float64 with nulls set to 0.0 (row count unchanged)."""
    missing = [c for c in COLUMNS if c not in df.columns]
    if missing:
        raise KeyError(f"Trajectory table is missing columns: {missing}")

    out = df[COLUMNS].fillna(0.0)
    return out.astype(np.float64)


def load_trajectory(key: str, input_dir: str, source=None) -> pd.DataFrame:
    start = time.perf_counter()

    if source is None:
        source = open_source(key, input_dir)
    df = select_columns(source.fetch(key))

    print(df.head())
    print(f"Loading time: {time.perf_counter() - start:.3f}s, Length: {len(df)}")
    return df


def to_array(df: pd.DataFrame) -> np.ndarray:
    """(N, 4) float64 array in x, y, z, t order."""
    return df[COLUMNS].to_numpy(dtype=np.float64)
