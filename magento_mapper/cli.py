#!/usr/bin/env python3
import argparse
import asyncio
import json
import logging
import sys

from magento_mapper.engine import create_engine
from magento_mapper.errors import MapperError, MappingLoadError
from magento_mapper.loader import MappingLoader


def load_record(path: str):
    with open(path, encoding='utf-8') as f:
        record = json.load(f)
    if not isinstance(record, dict):
        raise MappingLoadError(f"Record in {path} must be a JSON object, got {type(record).__name__}")
    return record


def main(argv=None):
    p = argparse.ArgumentParser(description="Map an ERP product record to a Magento product payload")
    p.add_argument('--mapping', required=True)
    p.add_argument('--record', required=True)
    p.add_argument('--schema', default=None)
    p.add_argument('--log-level', default='WARNING')
    args = p.parse_args(argv)
    logging.basicConfig(level=args.log_level.upper(), format='%(levelname)s %(name)s: %(message)s')
    try:
        config = MappingLoader.load(args.mapping, schema_path=args.schema)
        record = load_record(args.record)
    except (MappingLoadError, OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
        print(f"Error loading input: {e}", file=sys.stderr)
        return 2
    eng = create_engine(config)
    try:
        payload = asyncio.run(eng.transform(record))
    except MapperError as e:
        print(f"Transform failed: {e}", file=sys.stderr)
        return 1
    print(json.dumps(payload, indent=2))
    return 0


if __name__ == '__main__':
    sys.exit(main())
