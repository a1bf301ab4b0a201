"""Sunday school attendance package.

Feature modules (classes, students, attendance, imports, reports, teachers)
each carry their own model, repository, service and thin Flask controller.
"""
