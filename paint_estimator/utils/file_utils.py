import json
import os

from paint_estimator.config import Config


def write_output(name, data, output_dir=None):
    output_dir = output_dir or Config.OUTPUT_DIR
    os.makedirs(output_dir, exist_ok=True)
    path = os.path.join(output_dir, f"{name}.json")
    with open(path, "w") as fh:
        json.dump(data, fh, indent=2)
    return path
