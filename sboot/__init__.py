"""sboot: scaffolding for Spring Boot projects laid out by feature module.

Scans a project into modules and layers, and generates entities,
repositories, services, controllers, DTOs, mappers and enums inside them.
"""

__version__ = "1.0.0"
