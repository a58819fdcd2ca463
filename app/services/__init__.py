"""
Services layer - Business logic goes here.
Each service receives its Firestore client (or other channel) explicitly.

- report_service: Report Store
- device_service: Device Registry
- notification_service / mail_service: best-effort alert channels
- alert_dispatcher: fan-out of a new report to both channels
- export_service: monthly CSV export
- user_service: seed-only credential store
"""
