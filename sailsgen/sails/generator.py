"""Sails model and controller generator."""

import asyncio
import json
import logging
from pathlib import Path
from typing import Any, Dict, Iterable, List

from ..database.models import Model, NormalizedColumn
from ..database.naming import model_file_name, normalize_identity

logger = logging.getLogger(__name__)


class SailsModelGenerator:
    """Generates Sails model/controller modules from Model objects."""

    def __init__(self, project_path: str = ".", controllers: bool = True):
        self.project_path = Path(project_path)
        self.model_dir = self.project_path / "api" / "models"
        self.controller_dir = self.project_path / "api" / "controllers"
        self.controllers = controllers

    def attribute(self, column: NormalizedColumn, attribute_name: str) -> Dict[str, Any]:
        """Sails attribute definition for one column.

        Foreign-key columns become `model` associations, which take no
        type, size, null or default settings.
        """
        if column.references:
            attr: Dict[str, Any] = {
                "model": normalize_identity(column.references),
                "required": column.required,
            }
            if column.unique:
                attr["unique"] = True
            if column.name != attribute_name:
                attr["columnName"] = column.name
            return attr

        attr = {"type": column.type, "required": column.required}

        if column.auto_increment:
            attr["autoIncrement"] = True
        if column.unique:
            attr["unique"] = True
        if column.index:
            attr["index"] = True
        if column.allow_null and not column.required:
            attr["allowNull"] = True
        if column.enum_values is not None:
            attr["isIn"] = list(column.enum_values)
        if column.size is not None:
            attr["size"] = column.size
        if column.has_default:
            attr["defaultsTo"] = column.default
        if column.name != attribute_name:
            attr["columnName"] = column.name

        return attr

    def model_definition(self, model: Model) -> Dict[str, Any]:
        definition: Dict[str, Any] = {
            "tableName": model.table_name,
            "schema": model.schema,
            "migrate": model.migrate,
        }
        if model.primary_key is not None:
            definition["primaryKey"] = model.primary_key
        definition["attributes"] = {
            name: self.attribute(column, name) for name, column in model.columns.items()
        }
        return definition

    def generate_model(self, model: Model) -> str:
        """Generate the model module source."""
        name = model_file_name(model.identity)
        body = json.dumps(self.model_definition(model), indent=2)
        lines = [
            "/**",
            f" * {name}.js",
            " *",
            f" * @description :: Generated from table `{model.table_name}`.",
            " * @docs        :: https://sailsjs.com/docs/concepts/models-and-orm/models",
            " */",
            "",
            f"module.exports = {body};",
            "",
        ]
        return "\n".join(lines)

    def generate_controller(self, model: Model) -> str:
        """Generate an empty controller module source."""
        name = f"{model_file_name(model.identity)}Controller"
        lines = [
            "/**",
            f" * {name}.js",
            " *",
            f" * @description :: Server-side actions for handling incoming requests for {model.identity}.",
            " * @help        :: See https://sailsjs.com/docs/concepts/actions",
            " */",
            "",
            "module.exports = {",
            "};",
            "",
        ]
        return "\n".join(lines)

    async def write_model(self, model: Model) -> List[Path]:
        """Write the artifacts for one model; returns the written paths."""
        writes = [
            _write_file(self.model_dir / f"{model_file_name(model.identity)}.js", self.generate_model(model))
        ]
        if self.controllers:
            writes.append(_write_file(
                self.controller_dir / f"{model_file_name(model.identity)}Controller.js",
                self.generate_controller(model),
            ))
        return list(await asyncio.gather(*writes))

    async def write_models(self, models: Iterable[Model]) -> List[Path]:
        """Write artifacts for several models, waiting for every write."""
        written = await asyncio.gather(*(self.write_model(model) for model in models))
        return [path for paths in written for path in paths]


async def _write_file(path: Path, contents: str) -> Path:
    logger.info("Writing %s", path)

    def _write():
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(contents, encoding="utf-8")

    await asyncio.to_thread(_write)
    return path
