import json
import logging
from pathlib import Path

import click

from .archive import archive_file_name, create_zip
from .errors import GenerationError
from .pipeline import (
    ArrayInference,
    CollectionType,
    DateType,
    FieldAccess,
    GeneratorConfig,
    InputKind,
    NullHandling,
    NumberStrategy,
    PojoGenerator,
    SerializationLibrary,
)
from .pipeline.analyzer.name_resolver import sanitize_java_identifier
from .schema_check import validate_json_schema
from .writer import AtomicWriter

logger = logging.getLogger(__name__)


def _choices(enum_cls):
    return click.Choice([member.value for member in enum_cls])


@click.command()
@click.option("--name", "-n", default=None, type=str, help="Root class name (defaults to the input file name)")
@click.option("--package", "-p", "package_name", default=None, type=str, help="Java package for the generated classes")
@click.option("--config", "-c", default=None, type=click.Path(exists=True, resolve_path=True))
@click.option("--schema", "-s", is_flag=True, default=False, help="Treat the input as a JSON Schema instead of an example value")
@click.option("--field-access", default=None, type=_choices(FieldAccess))
@click.option("--data/--no-data", "use_data_annotation", default=None, help="Emit Lombok @Data")
@click.option("--builder/--no-builder", "use_builder_annotation", default=None, help="Emit Lombok @Builder (requires --data)")
@click.option("--annotations", "serialization_library", default=None, type=_choices(SerializationLibrary))
@click.option("--collection-type", default=None, type=_choices(CollectionType))
@click.option("--date-type", default=None, type=_choices(DateType))
@click.option("--null-handling", default=None, type=_choices(NullHandling))
@click.option("--enums/--no-enums", "generate_enums", default=None, help="Turn string value sets into Java enums")
@click.option("--stable-names/--no-stable-names", default=None, help="Reuse one class for identical objects")
@click.option("--array-inference", default=None, type=_choices(ArrayInference))
@click.option("--number-strategy", default=None, type=_choices(NumberStrategy))
@click.option("--inner-classes/--no-inner-classes", default=None, help="Nest child classes inside their parent")
@click.option("--zip", "as_zip", is_flag=True, default=False, help="Write a zip archive into OUTPUT instead of .java files")
@click.option("--force", "-f", is_flag=True, default=False, help="Overwrite existing output files")
@click.option("--no-validate", is_flag=True, default=False, help="Skip the meta-schema check of schema inputs")
@click.option("--verbose", "-v", is_flag=True, default=False)
@click.argument("path", default=None, type=click.Path(exists=True, dir_okay=False, resolve_path=True))
@click.argument("output", default=None, type=click.Path(resolve_path=True))
def json_to_pojo(name, package_name, config, schema, as_zip, force, no_validate, verbose, path, output, **overrides):
    """Generate Java POJO classes from the JSON value (or schema) in PATH into OUTPUT.

    OUTPUT is a directory receiving one .java file per class, or a path
    ending in .zip receiving an archive of them.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    with open(path, encoding="utf-8") as f:
        text = f.read()

    if schema and not no_validate:
        check = validate_json_schema(text)
        if not check.ok:
            raise click.ClickException("Schema validation failed:\n  " + "\n  ".join(check.errors))

    options = {}
    if config is not None:
        with open(config, encoding="utf-8") as f:
            options.update(json.load(f))

    # Explicit flags override the config file
    if name is not None:
        options["root_class_name"] = name
    elif not {"root_class_name", "rootClassName"} & options.keys():
        options["root_class_name"] = sanitize_java_identifier(Path(path).stem, pascal=True)
    if package_name is not None:
        options["package_name"] = package_name
    options.update({key: value for key, value in overrides.items() if value is not None})

    kind = InputKind.SCHEMA if schema else InputKind.JSON
    try:
        generator = PojoGenerator(GeneratorConfig.from_dict(options))
        result = generator.generate(kind, text)
    except GenerationError as e:
        raise click.ClickException(str(e)) from e

    writer = AtomicWriter(force=force)
    output_path = Path(output)
    if as_zip and output_path.suffix != ".zip":
        output_path = output_path / archive_file_name(generator.config.root_class_name)

    try:
        if output_path.suffix == ".zip":
            writer.write(output_path, create_zip(result.files, generator.config.root_class_name))
            written = [output_path]
        else:
            written = writer.write_files(output_path, result.files)
    except (FileExistsError, GenerationError) as e:
        raise click.ClickException(str(e)) from e

    logger.debug("Wrote %s", ", ".join(str(p) for p in written))
    click.echo(f"Generated {result.class_count} classes and {result.enum_count} enums")
    for target in written:
        click.echo(f"  {target}")
    for diagnostic in result.diagnostics:
        click.echo(f"warning: {diagnostic}", err=True)
