#!/usr/bin/env python3
from __future__ import annotations

import argparse
import re
import subprocess
from pathlib import Path

PROJECT_NAME = "spa-cloudfront-site"
REPO_ROOT = Path(__file__).resolve().parents[1]

STACK_KEY_COMMENTS = {
    "aws:profile": "AWS CLI profile used by the Pulumi AWS provider",
    "aws:region": "AWS region for the bucket (CloudFront is global)",
    "accountId": "Optional target account; requires deployRoleName",
    "bucketName": "Globally unique S3 bucket name for the site content",
    "defaultRootObject": "Default object served by CloudFront",
    "deployRoleName": "Optional IAM role Pulumi assumes in accountId",
}

# Scalars YAML would not load back as plain strings.
_NEEDS_QUOTES = re.compile(r"^(\d+|true|false|yes|no|null|~)$|[:#'\"]", re.IGNORECASE)


def ask(label: str, default: str | None = None, hint: str = "") -> str:
    """Prompt until a value is given; Enter accepts the default when there is one."""
    if hint:
        print(hint)
    suffix = f" [{default}]" if default else ""
    while True:
        answer = input(f"{label}{suffix}: ").strip()
        if answer:
            return answer
        if default:
            return default


def write_config_file(path: Path, content: str, *, overwrite: bool) -> bool:
    """Write a YAML file unless it already exists; True when the file was written."""
    if path.exists() and not overwrite:
        return False
    path.write_text(content, encoding="utf-8", newline="\n")
    return True


def build_pulumi_project_yaml(project_name: str) -> str:
    return "\n".join([
        f"name: {project_name}",
        "description: Private S3 bucket served through CloudFront (SPA routing)",
        "runtime:",
        "  name: python",
        "  options:",
        "    toolchain: pip",
        "    virtualenv: .venv",
        "",
    ])


def _yaml_scalar(value: str) -> str:
    if _NEEDS_QUOTES.search(value):
        return '"' + value.replace("\\", "\\\\").replace('"', '\\"') + '"'
    return value


def build_stack_yaml(prefix: str, values: dict[str, str]) -> str:
    """Render Pulumi.<stack>.yaml: keys sorted, each preceded by its comment."""
    lines = ["config:"]
    for key in sorted(values):
        comment = STACK_KEY_COMMENTS.get(key) or STACK_KEY_COMMENTS.get(key.removeprefix(f"{prefix}:"))
        if comment:
            lines.append(f"  # {comment}")
        lines.append(f"  {key}: {_yaml_scalar(values[key])}")
    lines.append("")
    return "\n".join(lines)


def collect_stack_values(
    prefix: str,
    *,
    bucket_name: str,
    region: str,
    profile: str | None,
    account_id: str | None,
    deploy_role_name: str | None,
) -> dict[str, str]:
    if not bucket_name.strip():
        raise ValueError("bucket name must not be empty")
    if bool(account_id) != bool(deploy_role_name):
        raise ValueError("--account-id and --deploy-role-name must be given together")

    values = {
        "aws:region": region,
        f"{prefix}:bucketName": bucket_name.strip(),
        f"{prefix}:defaultRootObject": "index.html",
    }
    if profile:
        values["aws:profile"] = profile
    if account_id:
        values[f"{prefix}:accountId"] = account_id
        values[f"{prefix}:deployRoleName"] = deploy_role_name
    return values


def _pulumi_run(args: list[str]) -> None:
    subprocess.run(args, check=True)


def pulumi_push_config(stack: str, values: dict[str, str]) -> None:
    """
    Uses Pulumi CLI to select/create the stack and set each config value.
    Pulumi rewrites Pulumi.<stack>.yaml itself.
    """
    print(f"\n[Config Push] Selecting stack: {stack}")
    _pulumi_run(["pulumi", "stack", "select", "--create", stack])

    for key in sorted(values):
        print(f"[Config Push] {key} = {values[key]}")
        _pulumi_run(["pulumi", "config", "set", key, values[key]])

    print("[Config Push] Done.")


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Initialize Pulumi project and stack config.")
    parser.add_argument("--bucket-name", help="S3 bucket name (if omitted, you will be prompted)")
    parser.add_argument("--stack", default="dev", help="Pulumi stack name (default: dev)")
    parser.add_argument("--region", help="AWS region (if omitted, you will be prompted). Example: ap-northeast-1")
    parser.add_argument("--profile", help="AWS CLI profile (optional)")
    parser.add_argument("--account-id", help="Target AWS account id (optional, needs --deploy-role-name)")
    parser.add_argument("--deploy-role-name", help="IAM role assumed in --account-id (optional)")
    parser.add_argument("--root", type=Path, default=REPO_ROOT, help="Directory holding Pulumi.yaml (default: repo root)")
    parser.add_argument("--force", action="store_true", help="Overwrite existing YAML files")
    parser.add_argument(
        "--push",
        action="store_true",
        help="After writing YAMLs, set the values on the stack via Pulumi CLI",
    )
    args = parser.parse_args(argv)

    prefix = PROJECT_NAME

    print("\n=== config_init.py ===")
    print(f"Writes Pulumi.yaml and Pulumi.{args.stack}.yaml into {args.root}")
    print("  - Press Enter to accept defaults where offered.")
    print("  - Use --force to overwrite existing files.\n")

    bucket_name = args.bucket_name or ask(
        "bucketName (e.g. example-site-assets)",
        hint="Globally unique S3 bucket name for the site content.",
    )
    region = args.region or ask("Deploy region", default="ap-northeast-1", hint="AWS region for the bucket.")

    values = collect_stack_values(
        prefix,
        bucket_name=bucket_name,
        region=region.strip(),
        profile=args.profile,
        account_id=args.account_id,
        deploy_role_name=args.deploy_role_name,
    )

    files = {
        args.root / "Pulumi.yaml": build_pulumi_project_yaml(prefix),
        args.root / f"Pulumi.{args.stack}.yaml": build_stack_yaml(prefix, values),
    }
    written = [p.name for p, content in files.items() if write_config_file(p, content, overwrite=args.force)]
    skipped = [p.name for p in files if p.name not in written]

    print("\n=== Summary (files) ===")
    print(f"Stack: {args.stack}")
    print(f"Bucket: {values[f'{prefix}:bucketName']}")
    if written:
        print("\nWritten/Updated:")
        for name in written:
            print(f"  - {name}")
    if skipped:
        print("\nSkipped (already exist, use --force to overwrite):")
        for name in skipped:
            print(f"  - {name}")

    if args.push:
        pulumi_push_config(args.stack, values)
    else:
        print("\n(Push skipped) To set the values via Pulumi CLI, re-run with --push")

    print("")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
