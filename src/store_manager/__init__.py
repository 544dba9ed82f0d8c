"""Store Manager package.

Feature modules (stores, employees, attendance, sales, ...) each carry a
domain model, a repository protocol with a MySQL adapter, a service layer and
a thin Flask controller. The money/time calculations live in pure modules
(`common.money`, `common.durations`, `payroll.calculator`, `reports.aggregation`,
`sales.reconciliation`) so they can be exercised without a database.
"""
