"""
Stand-in for the vw executable used by the tests.

Understands just enough of vw's command line:

  -k --cache_file C -d D --noop   copy D into cache C
  -f M --cache_file C [-l L]      "train": write model M recording L
  -t -i M --cache_file C          "test": read M, print an average loss

The test loss is (log10(L))**2, smallest at L = 1. Extra switches force
failures: --fake_fail_cache, --fake_fail_train, --fake_fail_test,
--fake_no_loss, --fake_bad_bytes (non UTF-8 stderr, exit 1), and
--fake_loss X prints X instead.
"""

import json
import math
import os
import shutil
import sys


def option(args, name, default=None):
    if name in args:
        i = args.index(name)
        if i + 1 < len(args):
            return args[i + 1]
    return default


def main(args):
    if "--fake_bad_bytes" in args:
        sys.stderr.flush()
        sys.stderr.buffer.write(b"\xff\xfe bad\n")
        sys.stderr.buffer.flush()
        return 1

    cache = option(args, "--cache_file")

    if "-k" in args and "-d" in args:
        if "--fake_fail_cache" in args:
            print("fake vw: cannot build cache", file=sys.stderr)
            return 3
        shutil.copyfile(option(args, "-d"), cache)
        return 0

    with open(cache, "r", encoding="utf-8") as f:
        n_records = sum(1 for line in f if line.strip())

    if "-t" in args:
        model_path = option(args, "-i")
        if not model_path or not os.path.exists(model_path):
            print(f"fake vw: model file {model_path} not found", file=sys.stderr)
            return 2
        with open(model_path, "r", encoding="utf-8") as f:
            model = json.load(f)
        if "--fake_fail_test" in args:
            print("fake vw: test failure", file=sys.stderr)
            return 1
        print(f"number of examples = {n_records}", file=sys.stderr)
        if "--fake_no_loss" in args:
            return 0
        loss = option(args, "--fake_loss")
        if loss is None:
            loss = math.log10(model["l"]) ** 2
        print(f"average loss = {loss}", file=sys.stderr)
        return 0

    model_path = option(args, "-f")
    if "--fake_fail_train" in args:
        print("fake vw: training failure", file=sys.stderr)
        return 1
    with open(model_path, "w", encoding="utf-8") as f:
        json.dump({"l": float(option(args, "-l", "0.5")), "records": n_records}, f)
    print("average loss = 0.693147", file=sys.stderr)
    return 0


if __name__ == "__main__":
    sys.exit(main(sys.argv[1:]))
