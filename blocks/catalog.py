"""
Catalogue of exposed AWS operations, grouped by app.

Each app is bound to one boto3 service. Operation names use the AWS API
spelling; block ids are derived from them with botocore's xform_name.
"""

APPS = {
    "cloudcontrol": ("cloudcontrol", [
        "GetResourceRequestStatus",
    ]),
    "cloudformation": ("cloudformation", [
        "ActivateType",
        "BatchDescribeTypeConfigurations",
        "CreateStackRefactor",
        "DescribeChangeSetHooks",
        "DescribeGeneratedTemplate",
        "DescribeStackEvents",
        "DescribeStackInstance",
        "DescribeStackResource",
        "DescribeStackResources",
        "DescribeStackSet",
        "DescribeStackSetOperation",
        "DetectStackResourceDrift",
        "ListStackInstanceResourceDrifts",
        "ListStackInstances",
        "ListStackRefactorActions",
        "ListStackResources",
        "ListStackSetOperationResults",
        "ListStackSets",
        "UpdateStack",
    ]),
    "cloudfront": ("cloudfront", [
        "CopyDistribution",
        "CreateConnectionGroup",
        "CreateDistributionTenant",
        "CreateDistributionWithTags",
        "CreateFunction",
        "CreateOriginRequestPolicy",
        "CreateRealtimeLogConfig",
        "CreateVpcOrigin",
        "GetCachePolicy",
        "GetContinuousDeploymentPolicy",
        "GetContinuousDeploymentPolicyConfig",
        "GetDistributionConfig",
        "GetDistributionTenant",
        "GetFieldLevelEncryption",
        "GetResponseHeadersPolicyConfig",
        "GetStreamingDistributionConfig",
        "ListDistributionTenantsByCustomization",
        "ListFieldLevelEncryptionConfigs",
        "ListFunctions",
        "ListStreamingDistributions",
        "TestFunction",
        "UpdateConnectionGroup",
        "UpdateContinuousDeploymentPolicy",
        "UpdateDistribution",
        "UpdateFieldLevelEncryptionProfile",
        "UpdateRealtimeLogConfig",
        "UpdateStreamingDistribution",
    ]),
    "cloudtrail": ("cloudtrail", [
        "CreateChannel",
        "CreateDashboard",
        "CreateTrail",
        "DescribeQuery",
        "GetChannel",
        "GetDashboard",
        "GetEventDataStore",
        "GetEventSelectors",
        "LookupEvents",
        "RestoreEventDataStore",
        "StopImport",
        "UpdateTrail",
    ]),
    "cloudwatch": ("cloudwatch", [
        "DeleteAnomalyDetector",
        "DescribeAlarmHistory",
        "DescribeAlarmsForMetric",
        "GetMetricStatistics",
        "GetMetricStream",
        "ListMetrics",
        "PutAnomalyDetector",
        "PutMetricData",
        "PutMetricStream",
    ]),
    "dynamodb": ("dynamodb", [
        "BatchExecuteStatement",
        "CreateGlobalTable",
        "DeleteItem",
        "DescribeBackup",
        "DescribeTableReplicaAutoScaling",
        "TransactGetItems",
        "UpdateGlobalTable",
        "UpdateGlobalTableSettings",
        "UpdateItem",
        "UpdateTableReplicaAutoScaling",
    ]),
    "ec2-admin": ("ec2", [
        "DescribeImportSnapshotTasks",
        "GetAwsNetworkPerformanceData",
        "GetDeclarativePoliciesReportSummary",
    ]),
    "ec2-capacity": ("ec2", [
        "AllocateHosts",
        "CancelReservedInstancesListing",
        "CreateCapacityReservation",
        "CreatePlacementGroup",
        "DescribeCapacityBlockExtensionOfferings",
        "DescribeCapacityReservationBillingRequests",
        "DescribeCapacityReservationFleets",
        "DescribeHostReservationOfferings",
        "DescribeHostReservations",
        "DescribeHosts",
        "DescribeReservedInstancesListings",
        "DescribeReservedInstancesModifications",
        "DescribeReservedInstancesOfferings",
        "GetReservedInstancesExchangeQuote",
        "PurchaseCapacityBlock",
        "PurchaseHostReservation",
    ]),
    "ec2-image-builder": ("ec2", [
        "CopyImage",
        "CreateImage",
        "DescribeFastLaunchImages",
        "DescribeFpgaImages",
        "DescribeImageAttribute",
        "DisableFastLaunch",
        "EnableFastLaunch",
        "ModifyFpgaImageAttribute",
    ]),
    "ec2-instances": ("ec2", [
        "CreateInstanceConnectEndpoint",
        "DescribeBundleTasks",
        "DescribeInstanceConnectEndpoints",
        "DescribeInstanceTopology",
        "DescribeInstances",
        "ImportInstance",
        "ModifyInstanceAttribute",
        "ModifyInstanceEventWindow",
    ]),
    "ec2-spot-fleet": ("ec2", [
        "DescribeFleetHistory",
        "DescribeScheduledInstanceAvailability",
        "DescribeScheduledInstances",
        "DescribeSpotFleetRequests",
        "DescribeSpotInstanceRequests",
        "DescribeSpotPriceHistory",
        "ModifyFleet",
        "ModifySpotFleetRequest",
        "PurchaseScheduledInstances",
        "RequestSpotFleet",
    ]),
    "ec2-storage": ("ec2", [
        "CopySnapshot",
        "CreateMacSystemIntegrityProtectionModificationTask",
        "CreateSnapshots",
        "DescribeFastSnapshotRestores",
        "DescribeMacModificationTasks",
        "DescribeVolumeStatus",
        "ImportSnapshot",
    ]),
    "ec2-transit-gateway": ("ec2", [
        "CreateTransitGatewayConnectPeer",
        "CreateTransitGatewayPeeringAttachment",
        "CreateTransitGatewayVpcAttachment",
        "DeleteTransitGatewayConnectPeer",
        "DescribeTransitGateways",
    ]),
    "ec2-transit-gateway-routing": ("ec2", [
        "CreateTransitGatewayRouteTableAnnouncement",
        "DescribeTransitGatewayRouteTableAnnouncements",
        "SearchTransitGatewayRoutes",
    ]),
    "ec2-vpn": ("ec2", [
        "DescribeClientVpnConnections",
        "DescribeClientVpnEndpoints",
        "DescribeVpnConnections",
        "ModifyVpnTunnelCertificate",
    ]),
    "ecr": ("ecr", [
        "BatchGetImage",
        "CreatePullThroughCacheRule",
        "CreateRepository",
        "DeleteRepositoryCreationTemplate",
        "DescribeImageScanFindings",
        "DescribeRepositories",
        "UpdateRepositoryCreationTemplate",
    ]),
    "ecs": ("ecs", [
        "CreateCapacityProvider",
        "CreateCluster",
        "DeleteService",
        "DescribeCapacityProviders",
        "DescribeClusters",
        "DescribeServiceDeployments",
        "DescribeServiceRevisions",
        "ListServiceDeployments",
        "PutClusterCapacityProviders",
        "RegisterContainerInstance",
        "StopTask",
        "SubmitTaskStateChange",
    ]),
    "eks": ("eks", [
        "AssociateEncryptionConfig",
        "CreateAccessEntry",
        "CreateAddon",
        "CreateNodegroup",
        "CreatePodIdentityAssociation",
        "DeleteAddon",
        "DeleteFargateProfile",
        "DescribeAddonVersions",
        "DescribeInsight",
        "DescribeNodegroup",
        "ListEksAnywhereSubscriptions",
        "UpdateClusterConfig",
        "UpdateNodegroupConfig",
        "UpdateNodegroupVersion",
        "UpdatePodIdentityAssociation",
    ]),
    "eventbridge": ("events", [
        "CreateConnection",
        "DescribeEndpoint",
        "ListEndpoints",
        "UpdateConnection",
    ]),
    "iam": ("iam", [
        "CreateServiceLinkedRole",
        "CreateVirtualMFADevice",
        "ListEntitiesForPolicy",
        "ListPoliciesGrantingServiceAccess",
        "ListRoles",
        "ListUsers",
        "ListVirtualMFADevices",
        "UploadServerCertificate",
    ]),
    "kms": ("kms", [
        "CreateCustomKeyStore",
        "Decrypt",
        "DeriveSharedSecret",
        "ListGrants",
        "ReplicateKey",
    ]),
    "lambda": ("lambda", [
        "CreateFunctionUrlConfig",
        "ListFunctionUrlConfigs",
        "ListFunctions",
        "UpdateCodeSigningConfig",
    ]),
    "rds": ("rds", [
        "AuthorizeDBSecurityGroupIngress",
        "CopyDBClusterSnapshot",
        "CopyDBSnapshot",
        "CreateBlueGreenDeployment",
        "CreateDBClusterSnapshot",
        "CreateDBProxyEndpoint",
        "CreateDBShardGroup",
        "CreateDBSnapshot",
        "CreateEventSubscription",
        "CreateIntegration",
        "CreateOptionGroup",
        "CreateTenantDatabase",
        "DeleteBlueGreenDeployment",
        "DeleteDBClusterAutomatedBackup",
        "DeleteTenantDatabase",
        "DescribeBlueGreenDeployments",
        "DescribeCertificates",
        "DescribeDBClusterAutomatedBackups",
        "DescribeDBClusterParameters",
        "DescribeDBInstanceAutomatedBackups",
        "DescribeDBLogFiles",
        "DescribeDBProxies",
        "DescribeDBProxyEndpoints",
        "DescribeDBProxyTargets",
        "DescribeDBRecommendations",
        "DescribeDBSecurityGroups",
        "DescribeDBSnapshotTenantDatabases",
        "DescribeDBSubnetGroups",
        "DescribeEngineDefaultParameters",
        "DescribeEvents",
        "DescribeGlobalClusters",
        "DescribeIntegrations",
        "DescribeOrderableDBInstanceOptions",
        "DescribeReservedDBInstancesOfferings",
        "FailoverGlobalCluster",
        "ModifyDBClusterEndpoint",
        "ModifyDBProxy",
        "ModifyDBProxyTargetGroup",
        "ModifyDBRecommendation",
        "ModifyIntegration",
        "ModifyOptionGroup",
        "ModifyTenantDatabase",
        "PurchaseReservedDBInstancesOffering",
        "StartDBInstanceAutomatedBackupsReplication",
        "SwitchoverBlueGreenDeployment",
    ]),
    "redshift": ("redshift", [
        "AssociateDataShareConsumer",
        "AuthorizeClusterSecurityGroupIngress",
        "CreateClusterSnapshot",
        "CreateClusterSubnetGroup",
        "CreateEndpointAccess",
        "CreateEventSubscription",
        "CreateHsmConfiguration",
        "CreateIntegration",
        "CreateRedshiftIdcApplication",
        "CreateSnapshotSchedule",
        "CreateUsageLimit",
        "DescribeClusterSecurityGroups",
        "DescribeDataShares",
        "DescribeDataSharesForConsumer",
        "DescribeDataSharesForProducer",
        "DescribeEndpointAccess",
        "DescribeEvents",
        "DescribeRedshiftIdcApplications",
        "DescribeScheduledActions",
        "DescribeSnapshotSchedules",
        "DescribeTableRestoreStatus",
        "DescribeUsageLimits",
        "DisassociateDataShareConsumer",
        "GetReservedNodeExchangeConfigurationOptions",
        "ListRecommendations",
        "ModifyClusterSnapshot",
        "ModifyClusterSubnetGroup",
        "ModifyEventSubscription",
        "ModifyIntegration",
        "ModifyScheduledAction",
        "RestoreTableFromClusterSnapshot",
        "RevokeClusterSecurityGroupIngress",
    ]),
    "route-53": ("route53", [
        "ChangeResourceRecordSets",
        "CreateHealthCheck",
        "CreateHostedZone",
        "CreateKeySigningKey",
        "CreateTrafficPolicyInstance",
        "GetHealthCheck",
        "ListGeoLocations",
        "ListHostedZones",
        "ListHostedZonesByName",
        "ListResourceRecordSets",
        "TestDNSAnswer",
    ]),
    "s3": ("s3", [
        "CreateBucket",
        "CreateSession",
        "DeleteObjects",
        "GetBucketInventoryConfiguration",
        "GetBucketLifecycleConfiguration",
        "GetBucketMetadataTableConfiguration",
        "GetBucketNotificationConfiguration",
        "GetBucketReplication",
        "GetBucketWebsite",
        "ListBucketAnalyticsConfigurations",
        "ListBucketIntelligentTieringConfigurations",
        "ListBucketInventoryConfigurations",
        "ListObjectsV2",
        "ListParts",
        "PutBucketAcl",
        "PutBucketIntelligentTieringConfiguration",
        "PutBucketLifecycleConfiguration",
        "PutBucketLogging",
        "PutBucketNotificationConfiguration",
        "PutBucketReplication",
        "PutBucketWebsite",
        "PutObjectAcl",
    ]),
    "secrets-manager": ("secretsmanager", [
        "BatchGetSecretValue",
        "CreateSecret",
        "ListSecrets",
    ]),
    "ses": ("ses", [
        "CreateConfigurationSetEventDestination",
        "DescribeActiveReceiptRuleSet",
        "DescribeConfigurationSet",
        "DescribeReceiptRule",
        "DescribeReceiptRuleSet",
        "SendBounce",
        "SendBulkTemplatedEmail",
        "SendEmail",
    ]),
    "sqs": ("sqs", [
        "ReceiveMessage",
        "SendMessageBatch",
    ]),
    "ssm": ("ssm", [
        "CreateActivation",
        "CreateMaintenanceWindow",
        "CreateOpsItem",
        "CreateResourceDataSync",
        "DescribeAssociationExecutionTargets",
        "DescribeAutomationExecutions",
        "DescribeAvailablePatches",
        "DescribeDocument",
        "DescribeInstanceAssociationsStatus",
        "DescribeInstanceInformation",
        "DescribeInstancePatchStates",
        "DescribeInstancePatchStatesForPatchGroup",
        "DescribeInstanceProperties",
        "DescribeMaintenanceWindowExecutionTaskInvocations",
        "DescribeMaintenanceWindowExecutionTasks",
        "DescribeMaintenanceWindowSchedule",
        "DescribeMaintenanceWindowTasks",
        "DescribeOpsItems",
        "DescribeParameters",
        "DescribePatchGroupState",
        "DescribeSessions",
        "GetCommandInvocation",
        "GetDeployablePatchSnapshotForInstance",
        "GetDocument",
        "GetInventory",
        "GetMaintenanceWindow",
        "GetMaintenanceWindowExecutionTask",
        "GetMaintenanceWindowTask",
        "GetOpsItem",
        "GetOpsSummary",
        "GetParameterHistory",
        "GetPatchBaseline",
        "ListAssociationVersions",
        "ListCommandInvocations",
        "ListCommands",
        "ListComplianceItems",
        "ListDocumentMetadataHistory",
        "ListDocuments",
        "ListNodesSummary",
        "ListResourceComplianceSummaries",
        "ListResourceDataSync",
        "PutParameter",
        "UpdateDocument",
        "UpdateMaintenanceWindowTarget",
        "UpdateOpsItem",
    ]),
    "vpc-core": ("ec2", [
        "AssociateVpcCidrBlock",
        "CreateDefaultSubnet",
        "CreateDefaultVpc",
        "CreateSubnet",
        "CreateSubnetCidrReservation",
        "CreateVpcPeeringConnection",
        "DescribeFlowLogs",
        "DescribeSubnets",
        "DescribeVpcPeeringConnections",
        "ModifySubnetAttribute",
        "ModifyVpcPeeringConnectionOptions",
    ]),
    "vpc-endpoints": ("ec2", [
        "CreateVpcEndpointServiceConfiguration",
        "DescribeVpcEndpointConnectionNotifications",
        "DescribeVpcEndpointConnections",
        "DescribeVpcEndpoints",
        "ModifyVpcEndpointServiceConfiguration",
    ]),
    "vpc-routing": ("ec2", [
        "AllocateAddress",
        "CreateEgressOnlyInternetGateway",
        "CreateRoute",
        "CreateRouteTable",
        "DescribeAddresses",
        "DescribeNatGateways",
        "DescribeRouteTables",
        "ReplaceRoute",
    ]),
    "vpc-security": ("ec2", [
        "AuthorizeSecurityGroupIngress",
        "CreateNetworkAcl",
        "DescribeNetworkInterfaceAttribute",
        "DescribeNetworkInterfacePermissions",
        "DescribeSecurityGroupRules",
        "DescribeSecurityGroups",
        "ModifyNetworkInterfaceAttribute",
        "UpdateSecurityGroupRuleDescriptionsIngress",
    ]),
    "waf": ("waf", [
        "CreateRateBasedRule",
        "CreateWebACL",
        "ListActivatedRulesInRuleGroup",
    ]),
}
