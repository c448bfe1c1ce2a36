import logging
import os
from datetime import datetime
from typing import Callable, Optional

from rich.console import Console

from .errors import CreatorError, OperatorCancelled, PrivilegeError
from .errors_catalog import actionable_error
from .messages import MessageCatalog
from .models import ContainerSpec, CreatorSettings
from .services import validation
from .services.allocator import IdentifierAllocator
from .services.command_builder import build_create_command, build_network_descriptor
from .services.command_runner import CommandRunner
from .services.control_plane import ProxmoxControlPlane
from .services.credentials import CredentialResolver
from .services.filesystem import FileSystemService
from .services.post_configure import PostConfigureService
from .services.prompts import Prompter
from .services.templates import TemplateResolver, detect_os_type

console = Console()
logger = logging.getLogger("lxccreator")


def _running_as_root() -> bool:
    return os.geteuid() == 0


class ContainerCreator:
    MODE_UNPRIVILEGED = "unprivileged"
    MODE_PRIVILEGED = "privileged"
    MODE_CANCEL = "cancel"

    def __init__(
        self,
        settings: CreatorSettings,
        dialog,
        messages: Optional[MessageCatalog] = None,
        control_plane=None,
        dry_run: bool = False,
        is_root: Callable[[], bool] = _running_as_root,
        filesystem_service: Optional[FileSystemService] = None,
        clock: Callable[[], datetime] = datetime.now,
    ):
        self.settings = settings
        self.messages = messages or MessageCatalog("en")
        self.dry_run = dry_run
        self.is_root = is_root
        self.clock = clock

        self.spec = ContainerSpec()
        self.password_file: Optional[str] = None
        self.container_created = False

        self.command_runner = CommandRunner(logger=logger, default_timeout=settings.command_timeout)
        self.control_plane = control_plane or ProxmoxControlPlane(
            command_runner=self.command_runner,
            logger=logger,
        )
        self.filesystem_service = filesystem_service or FileSystemService(logger=logger, console=console)
        self.prompter = Prompter(dialog=dialog, messages=self.messages, logger=logger)
        self.allocator = IdentifierAllocator(control_plane=self.control_plane, logger=logger)
        self.template_resolver = TemplateResolver(
            template_dir=settings.template_dir,
            pattern=settings.template_pattern,
            messages=self.messages,
            logger=logger,
        )
        self.credential_resolver = CredentialResolver(
            authorized_keys=settings.authorized_keys,
            filesystem_service=self.filesystem_service,
            logger=logger,
        )
        self.post_configure_service = PostConfigureService(
            control_plane=self.control_plane,
            messages=self.messages,
            logger=logger,
            console=console,
        )

    def _run_step(self, name: str, callback, *args, **kwargs):
        logger.info("Stage started: %s", name)

        try:
            result = callback(*args, **kwargs)
        except Exception:
            logger.error("❌ Stage failed: %s", name)
            raise

        logger.info("Stage finished: %s", name)
        return result

    def check_privileges(self):
        if not self.is_root():
            raise PrivilegeError(actionable_error("root_required"))
        logger.info(self.messages("root_ok"))

    def select_mode(self):
        options = [
            (self.MODE_UNPRIVILEGED, self.messages("mode_unpriv")),
            (self.MODE_PRIVILEGED, self.messages("mode_priv")),
        ]
        if not self.settings.unprivileged:
            options.reverse()
        options.append((self.MODE_CANCEL, self.messages("mode_cancel")))

        mode = self.prompter.choose(self.messages("choose_mode"), options, label=self.messages("mode_title"))
        if mode not in (self.MODE_UNPRIVILEGED, self.MODE_PRIVILEGED):
            raise OperatorCancelled(self.messages("abort"))
        self.spec.unprivileged = mode == self.MODE_UNPRIVILEGED
        logger.info("Container type selected: %s", mode)

    def allocate_id(self):
        ct_id = self.allocator.allocate(self.settings.id_min, self.settings.id_max)
        self.spec.id = ct_id
        self.prompter.ct_id = ct_id
        console.print(f"[blue]{self.messages('ctid_assigned')} {ct_id}[/blue]")
        logger.info("%s %s", self.messages("ctid_assigned"), ct_id)

    def input_hostname(self):
        self.spec.hostname = self.prompter.ask(
            "Hostname",
            self.messages("hostname"),
            validation.ensure_hostname,
        )
        logger.info("%s %s", self.messages("hostname"), self.spec.hostname)

    def input_password(self):
        self.spec.password = self.prompter.ask_secret(
            "Password",
            self.messages("password"),
            validation.ensure_password,
        )
        logger.info("Root password set (length: %d)", len(self.spec.password))

    def select_template(self):
        self.spec.template_file = self.template_resolver.select(self.prompter)

    def detect_os_type(self):
        self.spec.os_type = detect_os_type(self.spec.template_file)
        logger.info("%s %s", self.messages("ostype_detected"), self.spec.os_type)

    def input_resources(self):
        self.spec.rootfs_gb = self.prompter.ask(
            "Root FS",
            self.messages("rootfs"),
            validation.ensure_positive_integer,
            default=str(self.settings.default_rootfs_gb),
        )
        self.spec.cores = self.prompter.ask(
            "CPU",
            self.messages("cores"),
            validation.ensure_positive_integer,
            default=str(self.settings.default_cores),
        )
        self.spec.memory_mb = self.prompter.ask(
            "RAM",
            self.messages("memory"),
            validation.ensure_positive_integer,
            default=str(self.settings.default_memory_mb),
        )
        logger.info(
            "Resources: %s GB rootfs, %s core(s), %s MB memory",
            self.spec.rootfs_gb,
            self.spec.cores,
            self.spec.memory_mb,
        )

        if self.settings.static_network:
            self.spec.ip_octet = self.prompter.ask(
                "Network",
                self.messages("octet", base=self.settings.ipv4_base),
                validation.ensure_ip_octet,
            )
        logger.info("Network: %s", build_network_descriptor(self.settings, self.spec.ip_octet))

    def resolve_credentials(self):
        if not self.prompter.confirm(self.messages("ssh_add"), label="SSH"):
            logger.info(self.messages("ssh_temp"))
            return

        token = self.prompter.ask("SSH", self.messages("ssh_comment_prompt"), validation.ensure_key_comment)
        logger.info("%s: %s", self.messages("ssh_lookup"), token)

        match = self.credential_resolver.resolve(token, self.spec.id)
        if match is None:
            self.prompter.inform(self.messages("ssh_not_found"), label="SSH")
            return

        self.spec.ssh_public_key = match.key_line
        logger.info("✅ %s", self.messages("ssh_found"))

    def _network_summary(self) -> str:
        if not self.settings.static_network:
            return self.messages("dhcp")
        return f"{self.settings.ipv4_base}{self.spec.ip_octet}/{self.settings.ipv4_prefix}"

    def summary(self) -> str:
        return self.messages(
            "summary",
            id=self.spec.id,
            hostname=self.spec.hostname,
            template=self.spec.template_file,
            os_type=self.spec.os_type,
            ct_type=self.messages("mode_unpriv") if self.spec.unprivileged else self.messages("mode_priv"),
            cores=self.spec.cores,
            memory=self.spec.memory_mb,
            rootfs=self.spec.rootfs_gb,
            network=self._network_summary(),
            ssh=self.messages("yes") if self.spec.uses_ssh_key() else self.messages("no"),
        )

    def _staged_key_path(self) -> Optional[str]:
        match = self.credential_resolver.match
        return match.staged_path if match else None

    def preview(self) -> str:
        invocation = build_create_command(
            self.spec,
            self.settings,
            created_at=self.clock(),
            ssh_key_path=self._staged_key_path(),
        )
        return "\n".join(
            [
                self.messages("preview"),
                self.summary(),
                f"Password length: {len(self.spec.password)}",
                f"Command: {invocation.display()}",
            ]
        )

    def show_preview(self):
        text = self.preview()
        for line in text.splitlines():
            logger.info(line)
        console.print(text, markup=False)
        console.print(f"[yellow]{self.messages('dry_run_done')}[/yellow]")

    def confirm_settings(self):
        text = f"{self.summary()}\n\n{self.messages('confirm')}"
        if not self.prompter.confirm(text, label=self.messages("summary_title")):
            raise OperatorCancelled(self.messages("abort"))

    def create_container(self):
        console.print(f"[blue]{self.messages('creating')}[/blue]")
        logger.info(self.messages("creating"))

        self.password_file = self.filesystem_service.create_private_file(
            self.spec.password,
            prefix=f"lxc_pw_{self.spec.id}_",
        )
        try:
            invocation = build_create_command(
                self.spec,
                self.settings,
                created_at=self.clock(),
                password_path=self.password_file,
                ssh_key_path=self._staged_key_path(),
            )
            logger.info("Command: %s", invocation.display())
            self.control_plane.create(invocation)
            self.container_created = True
        finally:
            self.filesystem_service.remove_file(self.password_file)
            self.password_file = None

        logger.info("✅ %s (CT-ID: %s)", self.messages("created"), self.spec.id)

    def start_container(self):
        self.control_plane.start(self.spec.id)
        console.print(f"[green]{self.messages('started')}[/green]")
        logger.info("✅ %s (CT-ID: %s)", self.messages("started"), self.spec.id)

    def post_configure(self):
        ct_id = self.spec.id
        if self.settings.update_packages:
            self.post_configure_service.update_packages(ct_id, self.spec.os_type)
        self.post_configure_service.configure_locales(
            ct_id,
            self.spec.os_type,
            self.settings.locales,
            self.settings.default_locale or self.settings.locales[0],
        )
        self.post_configure_service.configure_timezone(ct_id, self.settings.timezone, self.spec.os_type)
        self.post_configure_service.finalize_ssh(ct_id, self._staged_key_path())

    def finish(self):
        self.prompter.inform(self.summary(), label=self.messages("summary_title"))
        if self.prompter.confirm(self.messages("reboot")):
            logger.info(self.messages("rebooting"))
            self.control_plane.reboot(self.spec.id)

    def cleanup(self):
        console.print(f"[dim]{self.messages('cleanup')}[/dim]")
        self.filesystem_service.remove_file(self.password_file)
        self.password_file = None
        self.credential_resolver.cleanup()
        logger.info(self.messages("cleanup_ok"))

    def _report_fatal(self, message: str):
        try:
            self.prompter.error(message)
        except CreatorError as exc:
            logger.warning("Could not display error dialog: %s", exc)

    def run(self) -> int:
        exit_code = 1

        try:
            logger.info("Starting lxc-creator%s...", " (dry run)" if self.dry_run else "")

            self._run_step("privilege_check", self.check_privileges)
            self._run_step("mode_select", self.select_mode)
            self._run_step("id_allocate", self.allocate_id)
            self._run_step("hostname_input", self.input_hostname)
            self._run_step("password_input", self.input_password)
            self._run_step("template_select", self.select_template)
            self._run_step("os_detect", self.detect_os_type)
            self._run_step("resource_input", self.input_resources)
            self._run_step("credential_resolve", self.resolve_credentials)

            if self.dry_run:
                self._run_step("dry_run_preview", self.show_preview)
                exit_code = 0
                return exit_code

            self._run_step("confirm", self.confirm_settings)
            self._run_step("create_container", self.create_container)
            self._run_step("start_container", self.start_container)
            self._run_step("post_configure", self.post_configure)
            self._run_step("finish", self.finish)

            logger.info("✅ Container %s provisioned.", self.spec.id)
            exit_code = 0
            return exit_code

        except (OperatorCancelled, KeyboardInterrupt):
            console.print(f"[bold red]{self.messages('abort')}[/bold red]")
            logger.warning("❌ [cancelled] %s", self.messages("abort"))
            self._report_fatal(self.messages("abort"))
            return exit_code
        except CreatorError as exc:
            console.print(f"[bold red]Error:[/bold red] {exc}")
            logger.error("❌ [%s] %s", exc.category, exc)
            self._report_fatal(f"{self.messages('failed')}\n{exc}")
            return exit_code
        except Exception as exc:
            console.print(f"[bold red]Unexpected error:[/bold red] {exc}")
            logger.exception("Unexpected error")
            self._report_fatal(f"{self.messages('failed')}\n{exc}")
            return exit_code
        finally:
            if exit_code != 0 and self.container_created:
                logger.warning(
                    "Container %s was created but provisioning did not finish. "
                    "It was left in place for inspection.",
                    self.spec.id,
                )
            self.cleanup()
