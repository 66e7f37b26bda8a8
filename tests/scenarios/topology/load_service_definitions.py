import vedro
from d42 import schema

from contexts.project_loaded import project_loaded


class Scenario(vedro.Scenario):
    subject = 'load service definitions'

    def when_user_loads_project(self):
        self.project = project_loaded(project_name='forced-name')

    def then_project_name_should_be_forced(self):
        assert self.project.name == 'forced-name'

    def and_service_definition_should_be_normalized(self):
        assert self.project['web'].as_dict() == schema.dict({
            'name': schema.str('web'),
            'image': schema.str('busybox:stable'),
            'command': schema.list([schema.str('sh'), schema.str('-c'), schema.str]),
            'working_dir': schema.str('/srv'),
            'environment': schema.dict({'PORT': schema.str('8080')}),
            'depends_on': schema.list([schema.str('web-init')]),
            'restart': schema.str('unless-stopped'),
        })

    def and_project_should_be_read_only(self):
        try:
            self.project.services['web'] = None
        except TypeError:
            pass
        else:
            raise AssertionError('services mapping should be read-only')
