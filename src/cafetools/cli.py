"""Command-line interface entry point for running cafetools workflows."""
import argparse, sys
from cafetools.workflows.per_file import ninfo_workflow, ts_workflow

WORKFLOW_MODULES = {
    "ninfo": ninfo_workflow,
    "ts": ts_workflow,
}

def main(argv=None):
    argv = sys.argv[1:] if argv is None else argv

    parser = argparse.ArgumentParser("cafetools CLI")
    sub = parser.add_subparsers(dest="kind", required=True)

    for kind, module in WORKFLOW_MODULES.items():
        kp = sub.add_parser(kind, help=f"{kind} workflows")
        tasks = kp.add_subparsers(dest="task", required=True)
        module.register_tasks(tasks)

    args = parser.parse_args(argv)
    return args._run(args)


if __name__ == "__main__":
    sys.exit(main())
