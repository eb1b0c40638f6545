import asyncio
import copy
import unittest

from standin import get_call_info
from standin import is_mock
from standin.stand_in import create_mock
from standin.stand_in import MAX_DEPTH
from standin.stand_in import StandIn


def assertEqual(expected, received, msg=''):
    if not msg:
        msg = 'expected %s, received %s' % (expected, received)
    if expected != received:
        raise AssertionError('%s != %s : %s' % (expected, received, msg))


class User(object):
    def __init__(self, id):
        self.id = id


class StandInCases(object):

    def test_create_mock_should_return_stand_in(self):
        mock = create_mock()
        assert isinstance(mock, StandIn)
        assert is_mock(mock)

    def test_unconfigured_call_should_return_stand_in(self):
        service = create_mock()
        user = service.get_user('1')
        assert isinstance(user, StandIn)
        info = get_call_info(service.get_user)
        assertEqual(1, info.call_count)
        assertEqual(['1'], info.last_call)

    def test_each_unconfigured_call_should_return_new_stand_in(self):
        service = create_mock()
        assert service.get_user() is not service.get_user()

    def test_attribute_reads_should_be_cached(self):
        service = create_mock()
        assert service.repository is service.repository
        assert service.repository.session is service.repository.session

    def test_call_results_should_support_deep_access(self):
        service = create_mock()
        name = service.get_user('1').profile.display_name()
        assert is_mock(name)

    def test_assigned_attribute_should_bypass_generation(self):
        service = create_mock()
        user = User('1')
        service.current_user = user
        assert service.current_user is user
        assert not is_mock(service.current_user)

    def test_assignment_should_override_generated_child(self):
        service = create_mock()
        generated = service.config
        service.config = {'debug': True}
        assertEqual({'debug': True}, service.config)
        assert service.config is not generated

    def test_assigned_none_should_stay_none(self):
        service = create_mock()
        service.cache = None
        assert service.cache is None

    def test_delete_should_drop_cached_child(self):
        service = create_mock()
        first = service.client
        del service.client
        assert service.client is not first

    def test_delete_unknown_attribute_should_raise(self):
        service = create_mock()
        try:
            del service.unknown
        except AttributeError:
            pass
        else:
            raise AssertionError('AttributeError not raised')

    def test_dir_should_list_materialized_members_only(self):
        service = create_mock()
        assertEqual([], dir(service))
        service.get_user
        service.region = 'eu'
        assertEqual(['get_user', 'region'], dir(service))

    def test_mock_attrs_should_reach_recorder(self):
        service = create_mock()
        service.get_user.mock_return_value(User('y'))
        assertEqual('y', service.get_user('1').id)
        assertEqual([('1',)], service.get_user.mock.calls)
        assertEqual([], dir(service.get_user))

    def test_configuration_should_chain_on_stand_in(self):
        service = create_mock()
        get_user = service.get_user
        chained = get_user.mock_return_value_once('x').mock_return_value('y')
        assert chained is get_user
        assertEqual(['x', 'y', 'y'], [get_user(), get_user(), get_user()])

    def test_nested_stand_ins_configure_independently(self):
        service = create_mock()
        service.users.find.mock_return_value('found')
        service.users.count.mock_return_value(3)
        assertEqual('found', service.users.find())
        assertEqual(3, service.users.count())
        assertEqual(0, get_call_info(service.users).call_count)

    def test_mock_reset_should_restore_stand_in_generation(self):
        service = create_mock()
        service.get_user.mock_return_value('pinned')
        service.get_user()
        service.get_user.mock_reset()
        assert isinstance(service.get_user(), StandIn)
        assertEqual(1, get_call_info(service.get_user).call_count)

    def test_mock_clear_should_keep_children(self):
        service = create_mock()
        child = service.child
        service()
        service.mock_clear()
        assert service.child is child
        assertEqual(0, get_call_info(service).call_count)

    def test_dunder_probes_should_not_grow_tree(self):
        service = create_mock()
        assert not hasattr(service, '__wrapped__')
        assert not hasattr(service, '__length_hint__')
        assertEqual([], dir(service))

    def test_pinned_dunder_should_be_read_back(self):
        service = create_mock()
        service.__version__ = '1.0'
        assertEqual('1.0', service.__version__)
        assertEqual(['__version__'], dir(service))
        del service.__version__
        assert not hasattr(service, '__version__')

    def test_pinned_reserved_name_should_override_recorder(self):
        service = create_mock()
        marker = object()
        service.mock_reset = marker
        assert service.mock_reset is marker
        service.mock_return_value(1)
        del service.mock_reset
        service.mock_reset()
        assert is_mock(service())

    def test_configuration_methods_should_be_stable(self):
        service = create_mock()
        assert service.mock_reset is service.mock_reset
        assert service.get_user.mock_return_value is \
            service.get_user.mock_return_value

    def test_private_names_should_still_be_mocked(self):
        service = create_mock()
        assert is_mock(service._connection)

    def test_copy_should_not_loop(self):
        service = create_mock()
        copy.copy(service)

    def test_repr_should_show_path(self):
        service = create_mock('service')
        assertEqual('<StandIn service>', repr(service))
        assertEqual('<StandIn service.users.find()>',
                    repr(service.users.find()))

    def test_await_should_evaluate_to_stand_in(self):
        service = create_mock()
        async def main():
            user = await service.fetch_user('1')
            return user, await user.load_profile()
        user, profile = asyncio.run(main())
        assert is_mock(user)
        assert is_mock(profile)
        assertEqual(['1'], get_call_info(service.fetch_user).last_call)

    def test_resolved_value_on_stand_in(self):
        service = create_mock()
        service.fetch_user.mock_resolved_value(User('1'))
        async def main():
            return await service.fetch_user()
        assertEqual('1', asyncio.run(main()).id)

    def test_rejected_value_on_stand_in(self):
        service = create_mock()
        service.fetch_user.mock_rejected_value(LookupError('missing'))
        async def main():
            try:
                await service.fetch_user()
            except LookupError as e:
                return str(e)
        assertEqual('missing', asyncio.run(main()))

    def test_depth_limit_should_yield_placeholder(self):
        node = create_mock()
        for _ in range(MAX_DEPTH):
            node = node.child
        assert is_mock(node)
        assert node.child is None
        assert node() is None

    def test_depth_beyond_limit_should_be_none(self):
        assert create_mock(depth=MAX_DEPTH + 1) is None
        assert is_mock(create_mock(depth=MAX_DEPTH))

    def test_self_assignment_should_be_allowed(self):
        service = create_mock()
        service.parent.child = service
        assert service.parent.child.parent is service.parent


class TestStandIn(StandInCases, unittest.TestCase):
    pass


if __name__ == '__main__':
    unittest.main()
