from __future__ import annotations

import argparse
import json
import logging
from dataclasses import asdict
from typing import Any, Sequence

from loyalty_client_sdk import ApiSession, load_config
from loyalty_client_sdk.exceptions import ApiError
from loyalty_client_sdk.models_admin import BulkAction
from pydantic import BaseModel
from pydantic import ValidationError as ResponseShapeError

from .config import load_dashboard_config
from .services.admin_businesses import AdminBusinessesService
from .services.auth_service import AuthService
from .services.branches_service import BranchesService
from .services.campaign_builder import CampaignBuilder
from .services.errors import ServiceError
from .services.notification_composer import NotificationComposer
from .services.payment_verification import PaymentVerifier

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"


def _jsonable(value: Any) -> Any:
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json", exclude_none=True)
    if isinstance(value, (list, tuple)):
        return [_jsonable(item) for item in value]
    if isinstance(value, dict):
        return {key: _jsonable(item) for key, item in value.items()}
    return value


def _emit(payload: Any) -> None:
    print(json.dumps(_jsonable(payload), indent=2, ensure_ascii=False, default=str))


def _session(args: argparse.Namespace) -> ApiSession:
    return ApiSession(load_config(args.env_file))


def cmd_login(args: argparse.Namespace) -> None:
    auth = AuthService(_session(args))
    auth.login(args.email, args.password)
    _emit(auth.whoami())


def cmd_logout(args: argparse.Namespace) -> None:
    AuthService(_session(args)).logout()
    _emit({"logged_out": True})


def cmd_whoami(args: argparse.Namespace) -> None:
    _emit(AuthService(_session(args)).whoami())


def cmd_branches_list(args: argparse.Namespace) -> None:
    service = BranchesService(_session(args))
    service.load()
    branches = service.visible(status=args.status, city=args.city, search=args.search)
    _emit({"branches": branches, "summary": asdict(service.summary())})


def cmd_branches_duplicate(args: argparse.Namespace) -> None:
    service = BranchesService(_session(args))
    service.load()
    _emit(service.duplicate(args.branch_id))


def cmd_branches_toggle(args: argparse.Namespace) -> None:
    service = BranchesService(_session(args))
    service.load()
    _emit(service.toggle_status(args.branch_id))


def cmd_campaigns_list(args: argparse.Namespace) -> None:
    client = _session(args).campaigns_client()
    filters = {"status": args.status, "campaign_type": args.type}
    _emit(client.list(filters, page=args.page, limit=args.limit))


def cmd_campaigns_create(args: argparse.Namespace) -> None:
    builder = CampaignBuilder(_session(args))
    builder.update(
        name=args.name,
        campaign_type=args.type,
        target_type=args.target_type,
        target_segment_id=args.segment_id,
        message_header=args.header,
        message_body=args.body,
        send_immediately=args.scheduled_at is None,
        scheduled_at=args.scheduled_at,
    )
    if args.offer_id:
        builder.set_field("linked_offer_id", args.offer_id)
    _emit(builder.submit())


def cmd_notify(args: argparse.Namespace) -> None:
    composer = NotificationComposer(_session(args))
    composer.select_type(args.type)
    fields: dict[str, Any] = {"customer_ids": args.customer}
    for name in ("header", "body", "offer_id", "milestone_title", "incentive_header", "incentive_body"):
        value = getattr(args, name)
        if value is not None:
            fields[name] = value
    composer.update(**fields)
    result = composer.send()
    _emit(
        {
            "successful_customers": result.successful_customers,
            "total_customers": result.total_customers,
            "failures": [asdict(failure) for failure in result.failures],
        }
    )


def cmd_verify_payment(args: argparse.Namespace) -> None:
    dashboard = load_dashboard_config(args.env_file)
    verifier = PaymentVerifier(
        _session(args),
        language=dashboard.language,
        max_poll_attempts=dashboard.payment_poll_attempts,
        poll_interval_seconds=dashboard.payment_poll_interval_seconds,
    )
    query = {
        "id": args.id,
        "status": args.status,
        "message": args.message,
        "reactivation": "true" if args.reactivation else None,
        "update_payment": "true" if args.update_payment else None,
        "plan": args.plan,
        "locations": str(args.locations),
    }
    result = verifier.verify(query)
    _emit(asdict(result))
    if not result.success:
        raise SystemExit(1)


def cmd_admin_login(args: argparse.Namespace) -> None:
    auth = AuthService(_session(args))
    state = auth.admin_login(args.email, args.password)
    _emit({"admin": state.admin_info, "authenticated": auth.has_admin_session()})


def cmd_admin_businesses(args: argparse.Namespace) -> None:
    service = AdminBusinessesService(_session(args))
    service.set_filters(status=args.status, region=args.region, business_type=args.business_type, search=args.search)
    service.load()
    _emit({"businesses": service.rows()})


def cmd_admin_approve(args: argparse.Namespace) -> None:
    service = AdminBusinessesService(_session(args))
    _emit(service.bulk(BulkAction.APPROVE, business_ids=args.business_ids, reason=args.reason))


def cmd_locations_search(args: argparse.Namespace) -> None:
    client = _session(args).locations_client()
    _emit(client.search(args.query, language=args.language, limit=args.limit))


def cmd_locations_districts(args: argparse.Namespace) -> None:
    _emit(_session(args).locations_client().districts(args.city_id, language=args.language))


def cmd_health(args: argparse.Namespace) -> None:
    _emit(_session(args).health_client().health())


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="loyalty-dashboard", description="Loyalty platform dashboard CLI")
    parser.add_argument("--env-file", default=None)
    parser.add_argument("--verbose", action="store_true")
    subparsers = parser.add_subparsers(dest="command", required=True)

    login_parser = subparsers.add_parser("login")
    login_parser.add_argument("--email", required=True)
    login_parser.add_argument("--password", required=True)
    login_parser.set_defaults(func=cmd_login)

    subparsers.add_parser("logout").set_defaults(func=cmd_logout)
    subparsers.add_parser("whoami").set_defaults(func=cmd_whoami)

    branches = subparsers.add_parser("branches").add_subparsers(dest="branches_command", required=True)
    branches_list = branches.add_parser("list")
    branches_list.add_argument("--status", default="all")
    branches_list.add_argument("--city", default="all")
    branches_list.add_argument("--search", default="")
    branches_list.set_defaults(func=cmd_branches_list)
    branches_duplicate = branches.add_parser("duplicate")
    branches_duplicate.add_argument("branch_id")
    branches_duplicate.set_defaults(func=cmd_branches_duplicate)
    branches_toggle = branches.add_parser("toggle")
    branches_toggle.add_argument("branch_id")
    branches_toggle.set_defaults(func=cmd_branches_toggle)

    campaigns = subparsers.add_parser("campaigns").add_subparsers(dest="campaigns_command", required=True)
    campaigns_list = campaigns.add_parser("list")
    campaigns_list.add_argument("--status", default="all")
    campaigns_list.add_argument("--type", default="all")
    campaigns_list.add_argument("--page", type=int, default=1)
    campaigns_list.add_argument("--limit", type=int, default=20)
    campaigns_list.set_defaults(func=cmd_campaigns_list)
    campaigns_create = campaigns.add_parser("create")
    campaigns_create.add_argument("--name", required=True)
    campaigns_create.add_argument("--type", required=True)
    campaigns_create.add_argument("--target-type", default="all_customers")
    campaigns_create.add_argument("--segment-id", default=None)
    campaigns_create.add_argument("--offer-id", default=None)
    campaigns_create.add_argument("--header", required=True)
    campaigns_create.add_argument("--body", required=True)
    campaigns_create.add_argument("--scheduled-at", default=None)
    campaigns_create.set_defaults(func=cmd_campaigns_create)

    notify = subparsers.add_parser("notify")
    notify.add_argument("--type", default="custom")
    notify.add_argument("--customer", action="append", required=True)
    notify.add_argument("--header", default=None)
    notify.add_argument("--body", default=None)
    notify.add_argument("--offer-id", default=None)
    notify.add_argument("--milestone-title", default=None)
    notify.add_argument("--incentive-header", default=None)
    notify.add_argument("--incentive-body", default=None)
    notify.set_defaults(func=cmd_notify)

    verify = subparsers.add_parser("verify-payment")
    verify.add_argument("--id", default=None)
    verify.add_argument("--status", default=None)
    verify.add_argument("--message", default=None)
    verify.add_argument("--reactivation", action="store_true")
    verify.add_argument("--update-payment", action="store_true")
    verify.add_argument("--plan", default=None)
    verify.add_argument("--locations", type=int, default=1)
    verify.set_defaults(func=cmd_verify_payment)

    admin = subparsers.add_parser("admin").add_subparsers(dest="admin_command", required=True)
    admin_login = admin.add_parser("login")
    admin_login.add_argument("--email", required=True)
    admin_login.add_argument("--password", required=True)
    admin_login.set_defaults(func=cmd_admin_login)
    admin_businesses = admin.add_parser("businesses")
    admin_businesses.add_argument("--status", default="all")
    admin_businesses.add_argument("--region", default="all")
    admin_businesses.add_argument("--business-type", default="all")
    admin_businesses.add_argument("--search", default="")
    admin_businesses.set_defaults(func=cmd_admin_businesses)
    admin_approve = admin.add_parser("approve")
    admin_approve.add_argument("business_ids", nargs="+")
    admin_approve.add_argument("--reason", default=None)
    admin_approve.set_defaults(func=cmd_admin_approve)

    locations = subparsers.add_parser("locations").add_subparsers(dest="locations_command", required=True)
    locations_search = locations.add_parser("search")
    locations_search.add_argument("query")
    locations_search.add_argument("--language", default="ar")
    locations_search.add_argument("--limit", type=int, default=10)
    locations_search.set_defaults(func=cmd_locations_search)
    locations_districts = locations.add_parser("districts")
    locations_districts.add_argument("city_id")
    locations_districts.add_argument("--language", default="ar")
    locations_districts.set_defaults(func=cmd_locations_districts)

    subparsers.add_parser("health").set_defaults(func=cmd_health)
    return parser


def main(argv: Sequence[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO, format=LOG_FORMAT)
    try:
        args.func(args)
    except ApiError as exc:
        _emit({"error": exc.code, "message": exc.message, "trace_id": exc.trace_id})
        raise SystemExit(1) from exc
    except ServiceError as exc:
        _emit({"error": exc.code, "message": exc.message, "trace_id": exc.trace_id})
        raise SystemExit(1) from exc
    except ResponseShapeError as exc:
        _emit({"error": "INVALID_RESPONSE", "message": f"Unexpected response shape ({exc.error_count()} fields)", "trace_id": None})
        raise SystemExit(1) from exc


if __name__ == "__main__":
    main()
